from __future__ import annotations
import io
import re
import chardet  # type: ignore
from pathlib import Path
from typing import Iterator, List, Optional

BINARY_BYTES = bytes(range(0, 32)) + b"\x7f"

def is_likely_binary(data: bytes, control_threshold: float = 0.30) -> bool:
    # non-ASCII text (UTF-8 comments) is fine; only NUL or control-heavy data is not
    if not data:
        return False
    if 0 in data:
        return True
    control = sum(1 for b in data if b in BINARY_BYTES and b not in (9, 10, 13))
    return (control / len(data)) > control_threshold

def read_text_safely(path: Path, max_bytes: int = 20_000_000) -> Optional[str]:
    """Return the decoded contents of ``path`` or None for binary/undecodable files.

    OSError (missing file, permissions) propagates to the caller.
    """
    with path.open("rb") as f:
        head = f.read(min(4096, max_bytes))
        if is_likely_binary(head):
            return None
        rest = f.read(max_bytes - len(head))
        data = head + rest
    if is_likely_binary(data):
        return None
    candidates = ['utf-8']
    enc = chardet.detect(data).get("encoding")
    if enc and enc.lower() not in ("utf-8", "ascii"):
        candidates.append(enc)
    for candidate in candidates:
        try:
            return data.decode(candidate, errors='strict')
        except (LookupError, UnicodeDecodeError):
            continue
    return None

def iter_lines(text: str) -> Iterator[str]:
    # only the newline is dropped; indentation and trailing blanks are kept
    buf = io.StringIO(text)
    for line in buf:
        yield line.rstrip("\n")

# Field helpers. Indices are 1-based like awk's $N; a missing field is "".

SYNTH_ARG_RE = re.compile(r"synth\(\s*([^,)]*)")

AWK_FS_RE = re.compile(r"[ \t]+")

def awk_fields(line: str) -> List[str]:
    # awk's default FS: runs of spaces/tabs only, leading and trailing ignored
    stripped = line.strip(" \t")
    return AWK_FS_RE.split(stripped) if stripped else []

def whitespace_field(line: str, index: int) -> str:
    fields = awk_fields(line)
    if 0 < index <= len(fields):
        return fields[index - 1]
    return ""

def delimited_field(line: str, sep: str, index: int) -> str:
    fields = line.split(sep)
    if 0 < index <= len(fields):
        return fields[index - 1]
    return ""

def quoted_value(line: str) -> str:
    return delimited_field(line, '"', 2)

def assigned_value(line: str) -> str:
    return strip_semicolons(delimited_field(line, " = ", 2))

def strip_semicolons(value: str) -> str:
    return value.replace(";", "")

def synth_status(line: str) -> str:
    m = SYNTH_ARG_RE.search(line)
    return m.group(1).strip() if m else ""

def contains_before_suffix(line: str, needle: str, suffix: str) -> bool:
    """True when ``line`` ends with ``suffix`` and ``needle`` occurs before it."""
    if not line.endswith(suffix):
        return False
    return needle in line[: len(line) - len(suffix)]

def prefixed_token(line: str, prefix: str) -> str:
    for token in awk_fields(line):
        if token.startswith(prefix):
            return token[len(prefix):]
    return ""

def split_globs(value: str) -> List[str]:
    return [g.strip() for g in (value or "").split(",") if g.strip()]
