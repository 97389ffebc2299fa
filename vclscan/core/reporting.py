from __future__ import annotations
import json
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional

from .models import Annotation


def render_annotations(annotations: List[Annotation], line_numbers: bool = False) -> List[str]:
    lines: List[str] = []
    for a in annotations:
        if line_numbers:
            lines.append(f"[{a.file_location}:{a.line_num}]")
        lines.extend(a.messages)
    return lines


class Reporter:
    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir

    def write_all(
        self,
        results: Dict[Path, List[Annotation]],
        audit_lines: Optional[List[str]] = None,
    ) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)

        data = [a.to_dict() for annotations in results.values() for a in annotations]
        (self.out_dir / "annotations.json").write_text(json.dumps(data, indent=2))

        index = []
        for path, annotations in results.items():
            counts = Counter(a.directive for a in annotations)
            index.append({
                "file": str(path),
                "lines": len(annotations),
                "recognized": sum(1 for a in annotations if a.recognized),
                "directives": dict(sorted(counts.items())),
            })
        (self.out_dir / "index.json").write_text(json.dumps(index, indent=2))

        self._write_markdown(results)
        self._write_summary(index, audit_lines)

    def _write_markdown(self, results: Dict[Path, List[Annotation]]) -> None:
        lines = ["# VCL Annotations", ""]
        for path, annotations in results.items():
            lines.append(f"## {path}")
            lines.append("")
            for a in annotations:
                lines.append(f"- **line**: {a.line_num}  ")
                lines.append(f"  **directive**: {a.directive}  ")
                lines.append(f"  **text**: `{a.text.strip()}`  ")
                if a.values:
                    lines.append(f"  **values**: `{json.dumps(a.values)}`  ")
                for message in a.messages:
                    lines.append(f"  - {message}")
                lines.append("")
        (self.out_dir / "annotations.md").write_text("\n".join(lines))

    def _write_summary(self, index: List[Dict], audit_lines: Optional[List[str]]) -> None:
        lines = ["# Scan Summary", ""]
        for item in index:
            lines.append(f"## {item['file']}")
            lines.append(f"- lines: {item['lines']}")
            lines.append(f"- recognized: {item['recognized']}")
            for name, count in item["directives"].items():
                lines.append(f"- {name}: {count}")
            lines.append("")
        lines.append("## Header audit")
        if audit_lines is None:
            lines.append("- not run")
        else:
            lines.extend(f"- {line}" for line in audit_lines)
        lines.append("")
        (self.out_dir / "summary.md").write_text("\n".join(lines))
