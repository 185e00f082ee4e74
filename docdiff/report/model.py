"""Coverage and staleness report model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Protocol, Set

from ..models import UndocumentedRef


@dataclass
class StaleDoc:
    """A doc whose annotated sources changed after its recorded revision."""

    path: str
    last_hash: str
    last_commit_info: str
    files_changed: int
    changed_files: List[str] = field(default_factory=list)


@dataclass
class Summary:
    total_docs: int = 0
    total_files: int = 0
    documented_files: int = 0
    orphaned_files: int = 0
    stale_docs: int = 0
    undocumented_refs: int = 0
    coverage_percent: float = 0.0


@dataclass
class DirectoryCoverage:
    """Annotation coverage for one directory prefix."""

    directory: str
    total_files: int
    documented_files: int

    @property
    def coverage_percent(self) -> float:
        if self.total_files == 0:
            return 0.0
        return self.documented_files / self.total_files * 100


@dataclass
class Report:
    metadata: Dict[str, str] = field(default_factory=dict)
    stale_docs: Dict[str, StaleDoc] = field(default_factory=dict)
    files_by_doc: Dict[str, List[str]] = field(default_factory=dict)
    orphaned_files: List[str] = field(default_factory=list)
    undocumented_refs: List[UndocumentedRef] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    directory_coverage: List[DirectoryCoverage] = field(default_factory=list)

    def calculate_summary(self, total_files: int, documented_files: int) -> None:
        coverage = documented_files / total_files * 100 if total_files > 0 else 0.0
        self.summary = Summary(
            total_docs=len(self.metadata),
            total_files=total_files,
            documented_files=documented_files,
            orphaned_files=len(self.orphaned_files),
            stale_docs=len(self.stale_docs),
            undocumented_refs=len(self.undocumented_refs),
            coverage_percent=coverage,
        )

    def calculate_directory_coverage(
        self, all_files: Iterable[str], documented: Set[str], depth: int
    ) -> None:
        """Group files by their first ``depth`` directories; root files fall under ``"."``."""
        totals: Dict[str, List[int]] = {}
        for path in all_files:
            directories = path.split("/")[:-1]
            key = "/".join(directories[:depth]) if directories else "."
            counts = totals.setdefault(key, [0, 0])
            counts[0] += 1
            if path in documented:
                counts[1] += 1
        self.directory_coverage = [
            DirectoryCoverage(directory=key, total_files=total, documented_files=done)
            for key, (total, done) in sorted(totals.items())
        ]


class Formatter(Protocol):
    def format(self, report: Report) -> str:
        """Render ``report`` as text."""
