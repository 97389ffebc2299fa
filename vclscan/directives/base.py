from __future__ import annotations
from typing import Dict, List, Optional


class DirectiveShape:
    """
    Base class for directive shapes. Subclasses set NAME, ORDER and the
    message templates at the top, and override matches() and extract().

    Shapes are tried in ascending ORDER and the first match wins, so ORDER is
    part of the behaviour, not just presentation. MESSAGE and every ADVICE
    line are formatted with the values returned by extract().
    """
    NAME: str = "base"
    ORDER: Optional[int] = None  # None keeps a class out of discovery
    MESSAGE: str = ""
    ADVICE: List[str] = []

    def matches(self, line: str) -> bool:
        raise NotImplementedError("matches must be implemented in subclasses")

    def extract(self, line: str) -> Dict[str, str]:
        return {}

    def describe(self, values: Dict[str, str]) -> List[str]:
        return [self.MESSAGE.format(**values)] + [a.format(**values) for a in self.ADVICE]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.NAME} order={self.ORDER}>"
