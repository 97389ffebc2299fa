from __future__ import annotations
from typing import Dict, List, Sequence

from .probe import HeaderSource

HEADER_ADVICE: Dict[str, str] = {
    "X-Forwarded-For": "Recommendation: Ensure the X-Forwarded-For header is set correctly to track the client's IP address.",
    "Cache-Control": "Recommendation: Use the Cache-Control header to manage caching directives.",
    "Authorization": "Recommendation: Be cautious with the Authorization header, ensure it doesn't cache sensitive data.",
}
GENERIC_ADVICE = "Recommendation: Review the header '{header}' for appropriate use."

NO_HEADERS_MESSAGE = "No HTTP headers set in the active VCL."
HEADERS_INTRO = "Checking HTTP headers set in the active VCL:"


def advise(header: str) -> str:
    # exact, case-sensitive lookup
    if header in HEADER_ADVICE:
        return HEADER_ADVICE[header]
    return GENERIC_ADVICE.format(header=header)


def audit_headers(headers: Sequence[str]) -> List[str]:
    if not headers:
        return [NO_HEADERS_MESSAGE]
    lines = [HEADERS_INTRO]
    for header in headers:
        lines.append(f"Header: {header}")
        lines.append(advise(header))
    return lines


class HeaderAuditor:
    """Advice for the headers reported by a live cache instance.

    ``audit`` lets ProbeError from the source propagate, so a failed probe is
    never reported as an empty configuration.
    """

    def __init__(self, source: HeaderSource) -> None:
        self.source = source

    def audit(self) -> List[str]:
        return audit_headers(self.source.list_active_configuration_headers())
