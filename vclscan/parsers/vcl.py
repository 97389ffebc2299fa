from __future__ import annotations
from pathlib import Path
from typing import Iterator, List

from ..core.models import ParsedRecord
from ..core.utils import read_text_safely, iter_lines


class UnreadableFileError(Exception):
    """The file exists but is binary or cannot be decoded as text."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Configuration file '{path}' is not a readable text file")
        self.path = path


class VclParser:
    NAME = "vcl"
    SUPPORTED_EXTENSIONS: List[str] = ["vcl"]

    def parse(self, path: Path) -> Iterator[ParsedRecord]:
        content = read_text_safely(path)
        if content is None:
            raise UnreadableFileError(path)
        for i, line in enumerate(iter_lines(content), start=1):
            yield ParsedRecord(file_path=path, line_num=i, text=line)
