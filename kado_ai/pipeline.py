"""Pipeline orchestration: scan, redact, assemble, confirm, send, decode."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from .config import ProjectConfig, load_project_config
from .confirmation import ConfirmationGate, is_affirmative, terminal_confirmation
from .errors import ConfigError, PromptWriteError
from .llm.client import AIClient
from .logging import get_logger
from .models import PipelineOutcome, PipelineState, ScanTarget
from .prompting import PromptAssembler
from .redaction import Redactor
from .scanner import DirectoryScanner, extract_file_content

PROMPT_FILENAME = "ai_input.txt"
TERRAFORM_DIR = "terraform"
ANSIBLE_DIR = "ansible"


class Pipeline:
    """Runs one analysis of an IaC directory against the configured AI backend."""

    def __init__(
        self,
        iac_path: Path | str,
        client: AIClient | None = None,
        *,
        project_config: ProjectConfig | None = None,
        scanner: DirectoryScanner | None = None,
        assembler: PromptAssembler | None = None,
        confirm: ConfirmationGate | None = None,
        save_prompt: bool = True,
    ) -> None:
        self.iac_path = Path(iac_path).expanduser()
        self.project = project_config or load_project_config(self.iac_path)
        self.client = client
        self.scanner = scanner or DirectoryScanner()
        self.assembler = assembler or PromptAssembler(
            Redactor.from_patterns(self.project.extra_patterns)
        )
        self.confirm = confirm or terminal_confirmation
        self.save_prompt = save_prompt
        self.state: Optional[PipelineState] = None
        self.history: List[PipelineState] = []
        self.logger = get_logger("pipeline")

    @property
    def prompt_path(self) -> Path:
        return self.iac_path / PROMPT_FILENAME

    def prepare(self) -> Tuple[str, Optional[Path]]:
        """Scan and assemble the prompt, saving it for review when enabled."""
        try:
            return self._prepare()
        except Exception:
            self._transition(PipelineState.FAILED)
            raise

    def run(self) -> PipelineOutcome:
        """Execute the full pipeline; declined confirmation yields a CANCELLED outcome."""
        try:
            if self.client is None:
                raise ConfigError("An AI client is required to send the prompt")
            prompt, saved_path = self._prepare()

            self._transition(PipelineState.AWAITING_CONFIRMATION)
            answer = self.confirm(saved_path)
            if not is_affirmative(answer):
                self._transition(PipelineState.CANCELLED)
                self.logger.info("Operation cancelled by user")
                return PipelineOutcome(
                    state=PipelineState.CANCELLED,
                    prompt=prompt,
                    prompt_path=saved_path,
                )

            self._transition(PipelineState.SENDING)
            raw = self.client.send(prompt)

            self._transition(PipelineState.DECODING)
            recommendation = self.client.decode(raw)
        except Exception:
            self._transition(PipelineState.FAILED)
            raise

        self._transition(PipelineState.DONE)
        return PipelineOutcome(
            state=PipelineState.DONE,
            prompt=prompt,
            prompt_path=saved_path,
            recommendation=recommendation,
        )

    def _prepare(self) -> Tuple[str, Optional[Path]]:
        self.logger.info("Starting analysis of %s", self.iac_path)
        scan = self.project.scan

        self._transition(PipelineState.SCANNING)
        terraform_root = self.iac_path / TERRAFORM_DIR
        terraform = self.scanner.scan(
            ScanTarget(terraform_root, scan.terraform_extensions, scan.exclude_dirs)
        )
        ansible = self.scanner.scan(
            ScanTarget(self.iac_path / ANSIBLE_DIR, scan.ansible_extensions, scan.exclude_dirs)
        )
        plan = self._read_plan(terraform_root / scan.plan_file)
        self.logger.debug(
            "Scanned %d terraform files and %d ansible files",
            len(terraform.files),
            len(ansible.files),
        )

        self._transition(PipelineState.REDACTING)
        sections = self.assembler.redact_sections(terraform.render(), ansible.render(), plan)

        self._transition(PipelineState.ASSEMBLING)
        prompt = self.assembler.render(sections)

        saved_path = self._write_prompt(prompt) if self.save_prompt else None
        return prompt, saved_path

    def _read_plan(self, plan_path: Path) -> Optional[str]:
        try:
            return extract_file_content(plan_path)
        except OSError:
            self.logger.debug("No plan file at %s", plan_path)
            return None

    def _write_prompt(self, prompt: str) -> Path:
        path = self.prompt_path
        try:
            path.write_text(prompt, encoding="utf-8")
        except OSError as exc:
            raise PromptWriteError(f"failed to save AI input to {path}: {exc}") from exc
        self.logger.info("AI input saved to %s", path)
        return path

    def _transition(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)


__all__ = ["ANSIBLE_DIR", "PROMPT_FILENAME", "Pipeline", "TERRAFORM_DIR"]
