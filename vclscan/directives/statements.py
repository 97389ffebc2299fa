from __future__ import annotations
from typing import Dict

from .base import DirectiveShape
from ..core.utils import assigned_value, prefixed_token, synth_status


class SynthShape(DirectiveShape):
    NAME = "synth"
    ORDER = 80
    MESSAGE = "Configuration: Returning a synthetic response with status code '{code}'."
    ADVICE = ["Recommendation: Ensure synthetic responses are used appropriately to handle errors."]

    def matches(self, line: str) -> bool:
        return "return (synth(" in line

    def extract(self, line: str) -> Dict[str, str]:
        return {"code": synth_status(line)}


class RequestHeaderShape(DirectiveShape):
    NAME = "req_header"
    ORDER = 90
    MESSAGE = "Configuration: Setting request HTTP header '{header}' to '{value}'."
    ADVICE = ["Recommendation: Ensure headers are set correctly to avoid request manipulation issues."]

    def matches(self, line: str) -> bool:
        return "set req.http." in line

    def extract(self, line: str) -> Dict[str, str]:
        return {
            "header": prefixed_token(line, "req.http."),
            "value": assigned_value(line),
        }


class TtlShape(DirectiveShape):
    NAME = "ttl"
    ORDER = 100
    MESSAGE = "Configuration: Setting backend response Time-To-Live (TTL) to '{ttl}'."
    ADVICE = [
        "Performance Note: TTL balances content freshness with backend load.",
        "Recommendation: Adjust TTL based on content volatility and caching strategy.",
    ]

    def matches(self, line: str) -> bool:
        return "set beresp.ttl =" in line

    def extract(self, line: str) -> Dict[str, str]:
        return {"ttl": assigned_value(line)}


class GraceShape(DirectiveShape):
    NAME = "grace"
    ORDER = 110
    MESSAGE = "Configuration: Setting backend response grace period to '{grace}'."
    ADVICE = [
        "Performance Note: Grace period allows serving slightly stale content during backend issues.",
        "Recommendation: Use grace periods to improve user experience during backend disruptions.",
    ]

    def matches(self, line: str) -> bool:
        return "set beresp.grace =" in line

    def extract(self, line: str) -> Dict[str, str]:
        return {"grace": assigned_value(line)}
