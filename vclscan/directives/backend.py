from __future__ import annotations
from typing import Dict

from .base import DirectiveShape
from ..core.utils import contains_before_suffix, quoted_value, strip_semicolons, whitespace_field


class VersionShape(DirectiveShape):
    NAME = "version"
    ORDER = 10
    MESSAGE = "Configuration: Using Varnish Configuration Language version 4.0."
    ADVICE = ["Note: Ensure compatibility with Varnish modules and backends."]

    def matches(self, line: str) -> bool:
        return "vcl 4.0" in line


class BackendShape(DirectiveShape):
    NAME = "backend"
    ORDER = 20
    MESSAGE = "Configuration: Found backend definition named '{name}'."

    def matches(self, line: str) -> bool:
        return contains_before_suffix(line, "backend", "{")

    def extract(self, line: str) -> Dict[str, str]:
        return {"name": whitespace_field(line, 2)}


class HostShape(DirectiveShape):
    NAME = "host"
    ORDER = 30
    MESSAGE = "Configuration: Backend server hostname is '{host}'."
    ADVICE = ["Recommendation: Verify that the hostname resolves correctly and is reachable."]

    def matches(self, line: str) -> bool:
        return "host =" in line

    def extract(self, line: str) -> Dict[str, str]:
        return {"host": quoted_value(line)}


class PortShape(DirectiveShape):
    NAME = "port"
    ORDER = 40
    MESSAGE = "Configuration: Backend server port is '{port}'."
    ADVICE = ["Recommendation: Ensure the backend service is listening on port {port}."]

    def matches(self, line: str) -> bool:
        return "port =" in line

    def extract(self, line: str) -> Dict[str, str]:
        # .port = "8080";  ->  8080
        return {"port": strip_semicolons(whitespace_field(line, 3)).replace('"', "")}
