"""Shared constants for prompt assembly."""

from __future__ import annotations

PLAN_NOT_FOUND = "Terraform plan not found"

PROMPT_TEMPLATE = "recommendations.j2"

SECTION_TITLES: dict[str, str] = {
    "terraform": "Terraform Code and OPA Rego Policies",
    "ansible": "Ansible Code and OPA Rego Policies",
    "plan": "Terraform Plan",
}


__all__ = ["PLAN_NOT_FOUND", "PROMPT_TEMPLATE", "SECTION_TITLES"]
