from __future__ import annotations
import importlib
import pkgutil
from typing import Dict, List, Type

from ..directives.base import DirectiveShape


def _discover_package_classes(pkg, base_cls) -> Dict[str, Type]:
    discovered: Dict[str, Type] = {}
    for m in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
        module = importlib.import_module(m.name)
        for attr_name in dir(module):
            obj = getattr(module, attr_name)
            if isinstance(obj, type) and issubclass(obj, base_cls) and obj is not base_cls:
                if getattr(obj, "ORDER", None) is None:
                    continue
                name = getattr(obj, "NAME", obj.__name__).lower()
                discovered[name] = obj
    return discovered


def discover_directive_shapes() -> List[DirectiveShape]:
    """Instantiate every shape in ``vclscan.directives``, in evaluation order."""
    from .. import directives as directives_pkg  # lazy import
    classes = _discover_package_classes(directives_pkg, DirectiveShape)
    shapes = sorted((cls() for cls in classes.values()), key=lambda s: s.ORDER)
    seen: Dict[int, str] = {}
    for shape in shapes:
        if shape.ORDER in seen:
            raise ValueError(
                f"Directive shapes {seen[shape.ORDER]!r} and {shape.NAME!r} share ORDER {shape.ORDER}"
            )
        seen[shape.ORDER] = shape.NAME
    return shapes
