"""Directory scanning and file content extraction."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger
from .models import ScannedDocument, ScannedFile, ScanTarget

logger = get_logger("scanner")


def extract_file_content(path: Path | str) -> str:
    """Return the full text of a file; read failures propagate as OSError."""
    return Path(path).read_text(encoding="utf-8", errors="replace")


class DirectoryScanner:
    """Walks an IaC subtree and concatenates the matching file bodies."""

    def scan(self, target: ScanTarget) -> ScannedDocument:
        """Return the files under ``target.root`` whose names match its extensions."""
        document = ScannedDocument(root=str(target.root))
        root = Path(target.root)
        if not root.is_dir():
            # A project may use only one IaC tool; an absent subtree is not an error.
            logger.debug("Skipping missing directory %s", root)
            return document

        walk_errors: List[OSError] = []
        for path in _iter_files(root, target.exclude_dirs, walk_errors):
            if not target.accepts(path.name):
                continue
            try:
                content = extract_file_content(path)
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", path, exc)
                continue
            document.files.append(ScannedFile(path=str(path), content=content))

        for error in walk_errors:
            logger.warning("Error scanning directory %s: %s", root, error)
            document.errors.append(str(error))

        logger.debug("Collected %d files from %s", len(document.files), root)
        return document


def scan_directory(root: Path | str, extensions: Sequence[str]) -> str:
    """Scan ``root`` for files ending in ``extensions`` and return the rendered document."""
    target = ScanTarget(root=Path(root), extensions=tuple(extensions))
    return DirectoryScanner().scan(target).render()


def _iter_files(
    root: Path, exclude_dirs: Iterable[str], errors: List[OSError]
) -> Iterator[Path]:
    excluded = set(exclude_dirs)
    for dirpath, dirnames, filenames in os.walk(root, onerror=errors.append):
        current_dir = Path(dirpath)
        # Sorted traversal keeps the document stable between runs.
        dirnames[:] = sorted(name for name in dirnames if name not in excluded)
        for filename in sorted(filenames):
            path = current_dir / filename
            if path.is_file():
                yield path


__all__ = ["DirectoryScanner", "extract_file_content", "scan_directory"]
