"""Tests for prompt assembly."""

from __future__ import annotations

from kado_ai.prompting import PLAN_NOT_FOUND, PromptAssembler, PromptSections
from kado_ai.redaction import Redactor
from kado_ai.redaction.rules import IPV4_RULE


def test_assemble_orders_sections_and_redacts_each() -> None:
    prompt = PromptAssembler().assemble(
        'password = "s3cr3t"',
        "ansible_host: 10.0.0.5",
        '{"format_version": "1.2", "api_key": "plan-key"}',
    )

    assert prompt.startswith(
        "Please provide comprehensive infrastructure recommendations based on the following:"
    )
    assert "Terraform Code and OPA Rego Policies:\npassword = [REDACTED]\n" in prompt
    assert "Ansible Code and OPA Rego Policies:\nansible_host: [REDACTED]\n" in prompt
    assert 'Terraform Plan:\n{"format_version": "1.2", "api_key": "[REDACTED]"}\n' in prompt
    assert prompt.endswith("security policies, and best practices.")
    assert prompt.index("Terraform Code") < prompt.index("Ansible Code") < prompt.index("Terraform Plan:")


def test_missing_plan_uses_marker_without_redaction() -> None:
    redactor = Redactor([IPV4_RULE], url_rule=None)
    sections = PromptAssembler(redactor).redact_sections("", "", None)

    assert sections == PromptSections(terraform="", ansible="", plan=PLAN_NOT_FOUND)


def test_empty_sections_keep_their_headers() -> None:
    prompt = PromptAssembler().assemble("", "", None)

    assert "Terraform Code and OPA Rego Policies:\n\n" in prompt
    assert "Ansible Code and OPA Rego Policies:\n\n" in prompt
    assert f"Terraform Plan:\n{PLAN_NOT_FOUND}\n" in prompt


def test_render_inserts_sections_verbatim() -> None:
    prompt = PromptAssembler().render(
        PromptSections(terraform="TF-BODY", ansible="ANSIBLE-BODY", plan="PLAN-BODY")
    )

    assert "Terraform Code and OPA Rego Policies:\nTF-BODY\n\n" in prompt
    assert "Ansible Code and OPA Rego Policies:\nANSIBLE-BODY\n\n" in prompt
    assert "Terraform Plan:\nPLAN-BODY\n\n" in prompt
