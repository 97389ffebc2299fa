from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from .loader import discover_directive_shapes
from .models import UNRECOGNIZED, Annotation, ParsedRecord
from ..directives.base import DirectiveShape


UNRECOGNIZED_MESSAGE = "Unrecognized line: {line}"
UNRECOGNIZED_WARNING = "Warning: This line could not be analyzed and may require manual review."


class DirectiveClassifier:
    """Map single VCL lines onto the first matching directive shape.

    The classifier keeps no state between lines; the same input always gives
    the same output.
    """

    def __init__(self, shapes: Optional[Sequence[DirectiveShape]] = None) -> None:
        if shapes is None:
            shapes = discover_directive_shapes()
        self.shapes: List[DirectiveShape] = list(shapes)

    def match(self, line: str) -> Optional[DirectiveShape]:
        for shape in self.shapes:
            if shape.matches(line):
                return shape
        return None

    def annotate(self, line: str, line_num: int = 0, file_location: str = "") -> Annotation:
        shape = self.match(line)
        if shape is None:
            return Annotation(
                line_num=line_num,
                text=line,
                directive=UNRECOGNIZED,
                messages=[UNRECOGNIZED_MESSAGE.format(line=line), UNRECOGNIZED_WARNING],
                file_location=file_location,
            )
        values = shape.extract(line)
        return Annotation(
            line_num=line_num,
            text=line,
            directive=shape.NAME,
            messages=shape.describe(values),
            values=values,
            file_location=file_location,
        )

    def annotate_record(self, record: ParsedRecord) -> Annotation:
        return self.annotate(record.text, record.line_num, str(record.file_path))

    def classify(self, line: str) -> List[str]:
        return self.annotate(line).messages

    def classify_all(self, records: Iterable[ParsedRecord]) -> List[Annotation]:
        return [self.annotate_record(rec) for rec in records]
