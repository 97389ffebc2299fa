from __future__ import annotations
from typing import Dict

from .base import DirectiveShape
from ..core.utils import contains_before_suffix, quoted_value, whitespace_field


class AclShape(DirectiveShape):
    NAME = "acl"
    ORDER = 50
    MESSAGE = "Configuration: Found Access Control List (ACL) named '{name}'."
    ADVICE = ["Recommendation: Verify ACL entries to ensure correct access control."]

    def matches(self, line: str) -> bool:
        return contains_before_suffix(line, "acl", "{")

    def extract(self, line: str) -> Dict[str, str]:
        return {"name": whitespace_field(line, 2)}


class IncludeShape(DirectiveShape):
    NAME = "include"
    ORDER = 60
    MESSAGE = "Configuration: Including additional VCL file '{filename}'."
    ADVICE = ["Recommendation: Check the included file for correctness and potential conflicts."]

    def matches(self, line: str) -> bool:
        return contains_before_suffix(line, "include", ";")

    def extract(self, line: str) -> Dict[str, str]:
        return {"filename": quoted_value(line)}


class SubroutineShape(DirectiveShape):
    NAME = "sub"
    ORDER = 70
    MESSAGE = "Configuration: Found subroutine '{name}'."
    ADVICE = ["Note: Analyze the logic within this subroutine for performance impact."]

    def matches(self, line: str) -> bool:
        # also catches any other "{"-terminated line mentioning "sub"
        return contains_before_suffix(line, "sub", "{")

    def extract(self, line: str) -> Dict[str, str]:
        return {"name": whitespace_field(line, 2)}
