from .auditor import HEADER_ADVICE, HeaderAuditor, advise, audit_headers
from .probe import HeaderSource, ProbeError, VarnishAdmProbe, parse_vcl_list

__all__ = [
    "HEADER_ADVICE",
    "HeaderAuditor",
    "HeaderSource",
    "ProbeError",
    "VarnishAdmProbe",
    "advise",
    "audit_headers",
    "parse_vcl_list",
]
