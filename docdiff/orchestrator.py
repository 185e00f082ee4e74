"""Pipelines behind the init, sync, changes, report and graph commands."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from .changes import ChangesRenderer, read_doc
from .config import DocDiffConfig, load_config
from .git import GitHistory
from .graph import DOTFormatter, MermaidFormatter, build_graph
from .languages import LanguageRegistry, build_registry
from .logging import get_logger
from .models import ScanResult
from .report import Formatter, HumanFormatter, JSONFormatter, Report, SARIFFormatter
from .scanner import Scanner
from .staleness import find_stale_docs
from .stores import DocVersionStore, sorted_docs

CI_ENV_VARS = ("CI", "GITHUB_ACTIONS", "GITLAB_CI", "JENKINS_URL", "CIRCLECI", "TRAVIS", "BUILDKITE")

_DOC_SUFFIXES = {".md", ".markdown"}


class DocumentNotTrackedError(LookupError):
    """Raised when a command names a doc missing from the metadata file."""

    def __init__(self, doc: str, tracked: List[str]) -> None:
        super().__init__(
            f"document not found in metadata: {doc}\nAvailable docs: {', '.join(tracked) or '(none)'}"
        )
        self.doc = doc
        self.tracked = tracked


class CheckFailure(RuntimeError):
    """Base class for findings that fail the report command in CI mode."""


class StaleDocsFound(CheckFailure):
    pass


class OrphanedFilesFound(CheckFailure):
    pass


class UndocumentedRefsFound(CheckFailure):
    pass


@dataclass
class InitOutcome:
    head: str
    versions: Dict[str, str]
    metadata_path: Path


@dataclass
class SyncOutcome:
    head: str
    updated: List[Tuple[str, str]] = field(default_factory=list)
    already_current: List[str] = field(default_factory=list)


@dataclass
class ReportOutcome:
    report: Report
    output: str
    failure: Optional[CheckFailure] = None


def running_in_ci(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    return any(env.get(name) for name in CI_ENV_VARS)


class Orchestrator:
    """Coordinates configuration, scanning, metadata and git history for each command."""

    def __init__(
        self,
        git_factory: Optional[Callable[[Path], GitHistory]] = None,
        registry: Optional[LanguageRegistry] = None,
    ) -> None:
        self._git_factory = git_factory or GitHistory
        self._registry = registry
        self.logger = get_logger("orchestrator")

    def run_init(self, path: str, *, force: bool = False) -> InitOutcome:
        """Record HEAD as the verified revision of every Markdown file in the docs directory."""
        root, config = self._load(path)
        store = DocVersionStore(config.metadata_path())
        if store.exists() and not force:
            raise FileExistsError(
                f"metadata file already exists: {config.metadata_file}\nUse --force to overwrite"
            )

        git = self._git_factory(root)
        if not git.is_repo():
            raise RuntimeError(f"not a git repository: {root}")
        head = git.head_short()

        docs_dir = config.docs_path()
        if not docs_dir.is_dir():
            raise FileNotFoundError(f"docs directory not found: {config.docs_directory}")

        docs_prefix = Path(config.docs_directory).as_posix().strip("/")
        versions: Dict[str, str] = {}
        for entry in sorted(docs_dir.iterdir()):
            if entry.is_file() and entry.suffix in _DOC_SUFFIXES:
                versions[f"{docs_prefix}/{entry.name}"] = head
        if not versions:
            raise RuntimeError(f"no markdown files found in {config.docs_directory}")

        store.save(versions)
        self.logger.info("Tracking %d docs at %s", len(versions), head)
        return InitOutcome(head=head, versions=versions, metadata_path=store.path)

    def run_sync(self, path: str, doc: Optional[str] = None) -> SyncOutcome:
        """Move one doc, or every tracked doc, to the current HEAD."""
        root, config = self._load(path)
        store, versions = self._load_versions(config)
        head = self._git_factory(root).head_short()

        if doc is not None and doc not in versions:
            raise DocumentNotTrackedError(doc, sorted_docs(versions))

        outcome = SyncOutcome(head=head)
        targets = [doc] if doc is not None else sorted_docs(versions)

        for name in targets:
            previous = versions[name]
            if previous == head:
                outcome.already_current.append(name)
                continue
            versions[name] = head
            outcome.updated.append((name, previous))

        if outcome.updated:
            store.save(versions)
        return outcome

    def run_changes(self, path: str, doc: str, *, mode: str = "default") -> str:
        """Describe how a doc's annotated source files changed since it was synced."""
        root, config = self._load(path)
        _, versions = self._load_versions(config)
        if doc not in versions:
            raise DocumentNotTrackedError(doc, sorted_docs(versions))

        scan_result = self._scan(root, config)
        files = scan_result.files_by_doc.get(doc, [])
        if not files:
            return f"No source files have {config.annotation_tag} annotations pointing to {doc}\n"

        renderer = ChangesRenderer(self._git_factory(root))
        doc_content = read_doc(root, doc) if mode == "ai" else None
        return renderer.render(doc, versions[doc], files, mode=mode, doc_content=doc_content)

    def run_report(
        self,
        path: str,
        *,
        view: str = "full",
        output_format: str = "text",
        depth: int = 1,
        ci: bool = False,
    ) -> ReportOutcome:
        """Build the coverage and staleness report; CI mode records a policy failure."""
        root, config = self._load(path)
        _, versions = self._load_versions(config)
        scan_result = self._scan(root, config)
        stale_docs = find_stale_docs(versions, scan_result, self._git_factory(root))

        report = Report(
            metadata=versions,
            stale_docs=stale_docs,
            files_by_doc=scan_result.files_by_doc,
            orphaned_files=scan_result.orphaned_files(),
            undocumented_refs=scan_result.undocumented_refs,
        )
        report.calculate_summary(len(scan_result.all_files), len(scan_result.annotations))
        if depth > 0:
            report.calculate_directory_coverage(
                scan_result.all_files, set(scan_result.annotations), depth
            )

        formatter: Formatter
        if output_format == "json":
            formatter = JSONFormatter()
        elif output_format == "sarif":
            formatter = SARIFFormatter()
        elif output_format == "text":
            formatter = HumanFormatter(view=view, tag=config.annotation_tag)
        else:
            raise ValueError(f"Unknown report format: {output_format}")

        outcome = ReportOutcome(report=report, output=formatter.format(report))
        if ci or running_in_ci():
            outcome.failure = self._check_ci_policy(config, report)
            if outcome.failure is not None:
                self.logger.debug("CI policy failed: %s", outcome.failure)
        return outcome

    def run_graph(self, path: str, *, mermaid: bool = False) -> str:
        """Render the doc-to-source graph, highlighting stale docs."""
        root, config = self._load(path)
        _, versions = self._load_versions(config)
        scan_result = self._scan(root, config)
        stale_docs = find_stale_docs(versions, scan_result, self._git_factory(root))

        graph = build_graph(scan_result.files_by_doc, set(stale_docs))
        formatter = MermaidFormatter() if mermaid else DOTFormatter()
        return formatter.format(graph)

    def languages(self, path: str) -> LanguageRegistry:
        _, config = self._load(path)
        return self._resolve_registry(config)

    # ------------------------------------------------------------------
    # Internals

    def _load(self, path: str) -> Tuple[Path, DocDiffConfig]:
        target = Path(path).expanduser()
        if not target.exists():
            raise FileNotFoundError(f"project path not found: {target}")
        # A file path selects the project directory that contains it.
        config = load_config(target)
        if config.source is not None:
            self.logger.debug("Loaded configuration from %s", config.source)
        return config.root, config

    def _load_versions(self, config: DocDiffConfig) -> Tuple[DocVersionStore, Dict[str, str]]:
        store = DocVersionStore(config.metadata_path())
        if not store.exists():
            raise FileNotFoundError(
                f"metadata file not found: {config.metadata_file}\nRun 'docdiff init' first"
            )
        return store, store.load()

    def _resolve_registry(self, config: DocDiffConfig) -> LanguageRegistry:
        if self._registry is not None:
            return self._registry
        return build_registry(config)

    def _scan(self, root: Path, config: DocDiffConfig) -> ScanResult:
        scanner = Scanner(config, self._resolve_registry(config))
        result = scanner.scan(root)
        for error in result.errors:
            self.logger.debug("Scan error: %s", error)
        return result

    @staticmethod
    def _check_ci_policy(config: DocDiffConfig, report: Report) -> Optional[CheckFailure]:
        if config.ci.fail_on_stale and report.stale_docs:
            return StaleDocsFound(f"stale documentation found ({len(report.stale_docs)} docs)")
        if config.ci.fail_on_orphaned and report.orphaned_files:
            return OrphanedFilesFound(f"orphaned files found ({len(report.orphaned_files)} files)")
        if config.ci.fail_on_undocumented_refs and report.undocumented_refs:
            return UndocumentedRefsFound(
                f"undocumented references found ({len(report.undocumented_refs)} references)"
            )
        return None


__all__ = [
    "CheckFailure",
    "DocumentNotTrackedError",
    "InitOutcome",
    "Orchestrator",
    "OrphanedFilesFound",
    "ReportOutcome",
    "StaleDocsFound",
    "SyncOutcome",
    "UndocumentedRefsFound",
    "running_in_ci",
]
