"""Builds the analysis prompt from scanned IaC documents."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..logging import get_logger
from ..redaction import Redactor
from .constants import PLAN_NOT_FOUND, PROMPT_TEMPLATE, SECTION_TITLES

logger = get_logger("prompting")


@dataclass(frozen=True)
class PromptSections:
    """Redacted section bodies ready for rendering."""

    terraform: str
    ansible: str
    plan: str


class PromptAssembler:
    """Redacts each section and renders it into the recommendations template."""

    def __init__(self, redactor: Redactor | None = None) -> None:
        self.redactor = redactor or Redactor()
        self._env = self._create_env()

    def assemble(
        self,
        terraform_doc: str,
        ansible_doc: str,
        plan_doc: Optional[str],
    ) -> str:
        """Return the prompt text; a missing plan is replaced by a fixed marker."""
        return self.render(self.redact_sections(terraform_doc, ansible_doc, plan_doc))

    def redact_sections(
        self,
        terraform_doc: str,
        ansible_doc: str,
        plan_doc: Optional[str],
    ) -> PromptSections:
        """Redact every section independently."""
        reports = [
            self.redactor.redact_with_report(terraform_doc),
            self.redactor.redact_with_report(ansible_doc),
        ]
        if plan_doc is None:
            plan = PLAN_NOT_FOUND
        else:
            plan_report = self.redactor.redact_with_report(plan_doc)
            reports.append(plan_report)
            plan = plan_report.text
        logger.info("Redacted %d sensitive values", sum(report.total for report in reports))
        return PromptSections(terraform=reports[0].text, ansible=reports[1].text, plan=plan)

    def render(self, sections: PromptSections) -> str:
        """Render already-redacted sections into the prompt template."""
        template = self._env.get_template(PROMPT_TEMPLATE)
        prompt = template.render(
            titles=SECTION_TITLES,
            terraform=sections.terraform,
            ansible=sections.ansible,
            plan=sections.plan,
        )
        logger.debug("Assembled prompt of %d characters", len(prompt))
        return prompt

    @staticmethod
    def _create_env() -> Environment:
        return Environment(
            loader=FileSystemLoader(str(Path(__file__).with_name("templates"))),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )


__all__ = ["PromptAssembler", "PromptSections"]
