"""
Redactor - applies the ordered redaction rules to a block of text.

The rule list is fixed at construction. ``redact`` runs every rule in order and
then the URL host pass, so extra rules supplied by a project always run after
the built-in secret and network rules and before hosts are stripped from URLs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..config import PatternConfig
from ..logging import SKIP_SCRUB, get_logger
from .rules import SENSITIVE_RULES, URL_HOST_RULE, RedactionRule

logger = get_logger("redaction")


@dataclass
class RedactionReport:
    """Redacted text together with the number of hits per rule."""

    text: str
    hits: Dict[str, int] = field(default_factory=dict)

    @property
    def redacted(self) -> bool:
        return any(self.hits.values())

    @property
    def total(self) -> int:
        return sum(self.hits.values())


class Redactor:
    """
    Strips secrets and network identifiers from text before it leaves the host.

    Example:
        redactor = Redactor()
        redactor.redact('password = "s3cr3t"')
        # 'password = [REDACTED]'
        redactor.redact("https://host.example.com/a/b")
        # 'https://[REDACTED]/a/b'
    """

    def __init__(
        self,
        rules: Optional[Sequence[RedactionRule]] = None,
        *,
        extra_rules: Iterable[RedactionRule] = (),
        url_rule: Optional[RedactionRule] = URL_HOST_RULE,
    ) -> None:
        ordered = list(SENSITIVE_RULES if rules is None else rules)
        ordered.extend(extra_rules)
        if url_rule is not None:
            ordered.append(url_rule)
        self._rules: Tuple[RedactionRule, ...] = tuple(ordered)

    @classmethod
    def from_patterns(cls, patterns: Iterable[PatternConfig]) -> Redactor:
        """Build the default redactor extended with project-defined patterns."""
        extra = [
            RedactionRule.from_pattern(item.name, item.pattern, item.replacement)
            for item in patterns
        ]
        return cls(extra_rules=extra)

    @property
    def rules(self) -> Tuple[RedactionRule, ...]:
        return self._rules

    def redact(self, text: str) -> str:
        """Return ``text`` with every rule applied in order."""
        if not text:
            return text
        for rule in self._rules:
            text = rule.apply(text)
        return text

    def redact_with_report(self, text: str) -> RedactionReport:
        """Redact ``text`` and record how many matches each rule replaced."""
        hits: Dict[str, int] = {}
        if not text:
            return RedactionReport(text=text, hits=hits)
        for rule in self._rules:
            text, count = rule.apply_counted(text)
            if count:
                hits[rule.name] = hits.get(rule.name, 0) + count
        if hits:
            logger.debug(
                "Redacted %d values (%s)",
                sum(hits.values()),
                ", ".join(f"{name}={count}" for name, count in hits.items()),
                # Rule names and counts only, which the rules would otherwise rewrite.
                extra={SKIP_SCRUB: True},
            )
        return RedactionReport(text=text, hits=hits)


__all__ = ["RedactionReport", "Redactor"]
