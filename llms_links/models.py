"""Data models for the link validation pipeline.

These are plain frozen dataclasses.  A run produces one
:data:`ValidationOutcome` per checked URL, which the orchestrator folds into a
single :class:`RunReport`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

# A discovered documentation file.
DocumentPath = Path


class LinkCheckError(Exception):
    """Base class for errors raised by the link validator."""


class FilesystemError(LinkCheckError):
    """The root directory is missing, not a directory, or unreadable."""


@dataclass(frozen=True)
class ExtractedLink:
    url: str
    source: DocumentPath


@dataclass(frozen=True)
class Success:
    url: str
    status_code: int
    source: DocumentPath


@dataclass(frozen=True)
class Failure:
    url: str
    reason: str
    source: DocumentPath


@dataclass(frozen=True)
class Skipped:
    url: str
    reason: str
    source: DocumentPath


ValidationOutcome = Union[Success, Failure, Skipped]


@dataclass(frozen=True)
class FileError:
    """A documentation file that could not be processed at all."""

    source: DocumentPath
    reason: str


@dataclass
class RunReport:
    """Aggregate result of one validation run."""

    files_checked: int = 0
    urls_checked: int = 0
    skipped: int = 0
    failures: Dict[DocumentPath, List[Failure]] = field(default_factory=dict)
    file_errors: List[FileError] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------
    def add_failure(self, failure: Failure) -> None:
        self.failures.setdefault(failure.source, []).append(failure)

    @property
    def failure_count(self) -> int:
        return sum(len(items) for items in self.failures.values())

    @property
    def ok(self) -> bool:
        """``True`` when nothing failed and every file was processed."""
        return self.failure_count == 0 and not self.file_errors
