"""Core data models shared across kado-ai components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import OperationCancelled


@dataclass(frozen=True)
class ScanTarget:
    """Directory to walk and the file suffixes to collect from it."""

    root: Path
    extensions: Tuple[str, ...]
    exclude_dirs: Tuple[str, ...] = ()

    def accepts(self, filename: str) -> bool:
        """Return True when the file name ends with an allowed suffix."""
        # Suffixes are compared case-sensitively, first match wins.
        for extension in self.extensions:
            if filename.endswith(extension):
                return True
        return False


@dataclass
class ScannedFile:
    """A single file collected by the directory scanner."""

    path: str
    content: str


@dataclass
class ScannedDocument:
    """Ordered file bodies gathered from one scan."""

    root: str
    files: List[ScannedFile] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def render(self) -> str:
        """Serialise the document into header + body blocks."""
        parts = [f"File: {item.path}\n{item.content}\n\n" for item in self.files]
        parts.extend(f"Error scanning directory {self.root}: {error}\n" for error in self.errors)
        return "".join(parts)


class PipelineState(str, Enum):
    """Stages of a single pipeline run."""

    SCANNING = "scanning"
    REDACTING = "redacting"
    ASSEMBLING = "assembling"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    SENDING = "sending"
    DECODING = "decoding"
    DONE = "done"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in {PipelineState.DONE, PipelineState.CANCELLED, PipelineState.FAILED}


@dataclass
class PipelineOutcome:
    """Result of a pipeline run that did not fail."""

    state: PipelineState
    prompt: str
    prompt_path: Optional[Path] = None
    recommendation: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.state is PipelineState.CANCELLED

    def unwrap(self) -> str:
        """Return the recommendation, raising OperationCancelled for a declined run."""
        if self.cancelled:
            raise OperationCancelled()
        return self.recommendation or ""
