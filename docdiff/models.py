"""Core data models shared across docdiff components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class Annotation:
    """Documentation files a single source file declares itself tied to."""

    file_path: str
    doc_paths: Tuple[str, ...]
    language: str


@dataclass(frozen=True)
class FileReference:
    """A source file mentioned inside a documentation file."""

    path: str
    line: int


@dataclass(frozen=True)
class UndocumentedRef:
    """A doc mentions a source file that does not annotate that doc."""

    doc_path: str
    file_path: str
    line: int


@dataclass
class ScanResult:
    """Aggregate of one tree scan."""

    annotations: Dict[str, Annotation] = field(default_factory=dict)
    files_by_doc: Dict[str, List[str]] = field(default_factory=dict)
    all_files: List[str] = field(default_factory=list)
    undocumented_refs: List[UndocumentedRef] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def add_annotation(self, file_path: str, doc_paths: Sequence[str], language: str) -> None:
        self.annotations[file_path] = Annotation(
            file_path=file_path, doc_paths=tuple(doc_paths), language=language
        )
        for doc in doc_paths:
            self.files_by_doc.setdefault(doc, []).append(file_path)

    def add_file(self, file_path: str) -> None:
        self.all_files.append(file_path)

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_undocumented_ref(self, doc_path: str, file_path: str, line: int) -> None:
        self.undocumented_refs.append(
            UndocumentedRef(doc_path=doc_path, file_path=file_path, line=line)
        )

    def orphaned_files(self) -> List[str]:
        """Return classified files without any annotation, in scan order."""
        return [path for path in self.all_files if path not in self.annotations]
