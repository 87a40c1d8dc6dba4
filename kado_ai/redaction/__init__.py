"""
Redaction of secrets and network identifiers from IaC content.

    from kado_ai.redaction import Redactor

    Redactor().redact('token = "abc123"')
    # 'token = [REDACTED]'
"""

from .engine import RedactionReport, Redactor
from .rules import PLACEHOLDER, SENSITIVE_RULES, URL_HOST_RULE, RedactionRule

__all__ = [
    "PLACEHOLDER",
    "RedactionReport",
    "RedactionRule",
    "Redactor",
    "SENSITIVE_RULES",
    "URL_HOST_RULE",
]
