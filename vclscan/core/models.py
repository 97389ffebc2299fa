from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


UNRECOGNIZED = "unrecognized"


@dataclass
class ParsedRecord:
    file_path: Path
    line_num: int
    text: str


@dataclass
class Annotation:
    line_num: int
    text: str
    directive: str  # shape NAME, or UNRECOGNIZED
    messages: List[str]
    values: Dict[str, str] = field(default_factory=dict)
    file_location: str = ""  # string path for JSON serializable output

    @property
    def recognized(self) -> bool:
        return self.directive != UNRECOGNIZED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_location": self.file_location,
            "line_num": self.line_num,
            "text": self.text,
            "directive": self.directive,
            "values": dict(self.values),
            "messages": list(self.messages),
        }
