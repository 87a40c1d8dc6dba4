"""
Redaction rules for IaC content.

Each rule pairs a compiled pattern with a replacement template. Rules are pure
string transforms and are applied in the order they appear in
``SENSITIVE_RULES``: broad assignment-style secrets first, then the narrower
nested ``value`` fields, then network literals. ``URL_HOST_RULE`` runs as a
separate final pass.

Templates keep the captured key name (or URL scheme and path) and replace only
the sensitive part with ``[REDACTED]``. Every value group is guarded by a
negative lookahead on the placeholder, so running the rules over their own
output changes nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

PLACEHOLDER = "[REDACTED]"

_NOT_REDACTED = r"(?!\[REDACTED\])"
# A value must not begin with a separator, or a key's closing quote could be
# mistaken for the value's opening quote on a second pass.
_VALUE_START = _NOT_REDACTED + r"(?![\s:=])"
_ASSIGNMENT = r"(?P<sep>\s*[=:]\s*)"
_ASSIGNED_VALUE = (
    r"""(?:"(?!\[REDACTED\]")[^"\n]+"|'(?!\[REDACTED\]')[^'\n]+'|"""
    + _NOT_REDACTED
    + r"""[^\s'",]+)"""
)
_NESTED_VALUE = (
    r"""(?P<open>['"]?)""" + _VALUE_START + r"""[^\s'",}]+(?P<close>['"]?)"""
)
_NESTED_TEMPLATE = r"\g<prefix>\g<open>" + PLACEHOLDER + r"\g<close>"

_IPV4_OCTET = r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IPV6_V4_OCTET = r"(?:25[0-5]|(?:2[0-4]|1{0,1}[0-9]){0,1}[0-9])"
_HEX = r"[0-9a-fA-F]{1,4}"


@dataclass(frozen=True)
class RedactionRule:
    """A single pattern and the template used to rewrite its matches."""

    name: str
    pattern: Pattern[str]
    replacement: str = PLACEHOLDER
    description: str = ""

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def apply(self, text: str) -> str:
        """Rewrite every non-overlapping match in ``text``."""
        return self.pattern.sub(self.replacement, text)

    def apply_counted(self, text: str) -> tuple[str, int]:
        """Rewrite ``text`` and return the number of replacements made."""
        return self.pattern.subn(self.replacement, text)

    @classmethod
    def from_pattern(cls, name: str, pattern: str, replacement: str = PLACEHOLDER) -> RedactionRule:
        """Build a rule from an uncompiled pattern string."""
        return cls(name=name, pattern=re.compile(pattern), replacement=replacement)

    def __repr__(self) -> str:
        return f"<RedactionRule: {self.name}>"


GENERIC_SECRET_RULE = RedactionRule(
    name="generic_secret",
    pattern=re.compile(
        r"(?P<key>aws_access_key|aws_secret_key|password|token|secret|api_key)"
        + _ASSIGNMENT
        + _ASSIGNED_VALUE,
        re.IGNORECASE,
    ),
    replacement=r"\g<key>\g<sep>" + PLACEHOLDER,
    description="Secret-named key assigned with = or :",
)

PRIVATE_KEY_ASSIGNMENT_RULE = RedactionRule(
    name="private_key_assignment",
    pattern=re.compile(
        r"(?P<key>private_key)"
        + _ASSIGNMENT
        + r"""['"]?-----BEGIN[^'",]*-----END[^'",]*['"]?""",
        re.IGNORECASE,
    ),
    replacement=r"\g<key>\g<sep>" + PLACEHOLDER,
    description="private_key attribute holding a PEM block",
)

PRIVATE_KEY_BLOCK_RULE = RedactionRule(
    name="private_key_block",
    pattern=re.compile(
        r"-----BEGIN (?:[A-Z0-9]+ )*PRIVATE KEY-----[\s\S]*?-----END (?:[A-Z0-9]+ )*PRIVATE KEY-----"
    ),
    description="Inline PEM private key block",
)

CONNECTION_STRING_RULE = RedactionRule(
    name="connection_string",
    pattern=re.compile(
        r"(?P<key>connection_string)" + _ASSIGNMENT + _ASSIGNED_VALUE,
        re.IGNORECASE,
    ),
    replacement=r"\g<key>\g<sep>" + PLACEHOLDER,
    description="Database or service connection string",
)

BEARER_TOKEN_RULE = RedactionRule(
    name="bearer_token",
    pattern=re.compile(
        r"""(?P<scheme>bearer\s+)['"]?""" + _NOT_REDACTED + r"""[^\s'",]+['"]?""",
        re.IGNORECASE,
    ),
    replacement=r"\g<scheme>" + PLACEHOLDER,
    description="Bearer token in an Authorization value",
)

NESTED_PASSWORD_RULE = RedactionRule(
    name="nested_password_value",
    pattern=re.compile(
        r"""(?P<prefix>"?\w*password"?\s*[:=]?\s*\{?\s*"?value"?\s*[:=]?\s*)""" + _NESTED_VALUE,
        re.IGNORECASE,
    ),
    replacement=_NESTED_TEMPLATE,
    description="Password wrapped in a nested value field",
)

NESTED_USER_RULE = RedactionRule(
    name="nested_user_value",
    pattern=re.compile(
        r"""(?P<prefix>"?\w*user"?\s*[:=]?\s*\{?\s*"?value"?\s*[:=]?\s*)""" + _NESTED_VALUE,
        re.IGNORECASE,
    ),
    replacement=_NESTED_TEMPLATE,
    description="User name wrapped in a nested value field",
)

QUOTED_SECRET_RULE = RedactionRule(
    name="quoted_secret",
    pattern=re.compile(
        r"""(?P<prefix>"?\w*(?:password|secret|key|token)"?\s*[:=]?\s*(?P<quote>["']))"""
        + _VALUE_START
        + r"""[^"'\n]+(?P=quote)""",
        re.IGNORECASE,
    ),
    replacement=r"\g<prefix>" + PLACEHOLDER + r"\g<quote>",
    description="Quoted value of a secret-like key",
)

NESTED_SECRET_RULE = RedactionRule(
    name="nested_secret_value",
    pattern=re.compile(
        r"""(?P<prefix>"?\w*(?:password|secret|key|token)"?\s*[:=]?\s*\{?\s*"?value"?\s*[:=]?\s*)"""
        + _NESTED_VALUE,
        re.IGNORECASE,
    ),
    replacement=_NESTED_TEMPLATE,
    description="Secret wrapped in a nested value field",
)

IPV4_RULE = RedactionRule(
    name="ipv4",
    pattern=re.compile(rf"\b(?:{_IPV4_OCTET}\.){{3}}{_IPV4_OCTET}\b"),
    description="IPv4 address literal",
)

# Bounded by lookarounds instead of \b so a shorter alternative cannot stop
# part-way through an address, and addresses starting with "::" still match.
IPV6_RULE = RedactionRule(
    name="ipv6",
    pattern=re.compile(
        r"(?<![\w:])(?:"
        r"fe80:(?::[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]{1,}|"
        rf"(?:{_HEX}:){{7,7}}{_HEX}|"
        rf"(?:{_HEX}:){{1,6}}:{_HEX}|"
        rf"(?:{_HEX}:){{1,5}}(?::{_HEX}){{1,2}}|"
        rf"(?:{_HEX}:){{1,4}}(?::{_HEX}){{1,3}}|"
        rf"(?:{_HEX}:){{1,3}}(?::{_HEX}){{1,4}}|"
        rf"(?:{_HEX}:){{1,2}}(?::{_HEX}){{1,5}}|"
        rf"{_HEX}:(?:(?::{_HEX}){{1,6}})|"
        rf"(?:{_HEX}:){{1,7}}:|"
        rf":(?:(?::{_HEX}){{1,7}}|:)|"
        rf"::(?:ffff(?::0{{1,4}}){{0,1}}:){{0,1}}(?:{_IPV6_V4_OCTET}\.){{3,3}}{_IPV6_V4_OCTET}|"
        rf"(?:{_HEX}:){{1,4}}:(?:{_IPV6_V4_OCTET}\.){{3,3}}{_IPV6_V4_OCTET}"
        r")(?![\w:])"
    ),
    description="IPv6 address literal",
)

URL_HOST_RULE = RedactionRule(
    name="url_host",
    pattern=re.compile(r"(?P<scheme>https?://)[\w.-]+(?P<rest>/?\S*)"),
    replacement=r"\g<scheme>" + PLACEHOLDER + r"\g<rest>",
    description="Host component of an http(s) URL",
)

SENSITIVE_RULES: Tuple[RedactionRule, ...] = (
    GENERIC_SECRET_RULE,
    PRIVATE_KEY_ASSIGNMENT_RULE,
    PRIVATE_KEY_BLOCK_RULE,
    CONNECTION_STRING_RULE,
    BEARER_TOKEN_RULE,
    NESTED_PASSWORD_RULE,
    NESTED_USER_RULE,
    QUOTED_SECRET_RULE,
    NESTED_SECRET_RULE,
    IPV4_RULE,
    IPV6_RULE,
)


__all__ = [
    "PLACEHOLDER",
    "RedactionRule",
    "SENSITIVE_RULES",
    "URL_HOST_RULE",
]
