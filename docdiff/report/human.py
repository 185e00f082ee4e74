"""Human-readable report output."""

from __future__ import annotations

from typing import Any, Dict, List

from ..config import DEFAULT_ANNOTATION_TAG
from ..templating import render
from .model import Report

VIEWS = ("full", "stale", "orphaned", "undocumented")

_FILES_PER_DOC = 5
_ORPHANS_SHOWN = 10


class HumanFormatter:
    """Renders a report as plain text; ``view`` narrows it to a single section."""

    def __init__(self, view: str = "full", tag: str | None = None) -> None:
        if view not in VIEWS:
            raise ValueError(f"Unknown report view: {view}")
        self.view = view
        self.tag = tag or DEFAULT_ANNOTATION_TAG

    def format(self, report: Report) -> str:
        stale_docs = [report.stale_docs[path] for path in sorted(report.stale_docs)]
        if self.view == "stale":
            return render("report_stale.txt.j2", stale_docs=stale_docs)
        if self.view == "orphaned":
            return render("report_orphaned.txt.j2", orphaned=report.orphaned_files, tag=self.tag)
        if self.view == "undocumented":
            return render("report_undocumented.txt.j2", undocumented_refs=report.undocumented_refs)

        return render(
            "report_full.txt.j2",
            stale_docs=stale_docs,
            docs=self._doc_rows(report),
            orphaned=report.orphaned_files[:_ORPHANS_SHOWN],
            orphaned_total=len(report.orphaned_files),
            orphaned_hidden=max(0, len(report.orphaned_files) - _ORPHANS_SHOWN),
            undocumented_refs=report.undocumented_refs,
            directories=report.directory_coverage,
            summary=report.summary,
            tag=self.tag,
        )

    @staticmethod
    def _doc_rows(report: Report) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for doc in sorted(report.metadata):
            files = report.files_by_doc.get(doc, [])
            rows.append(
                {
                    "path": doc,
                    "total": len(files),
                    "marker": " (stale)" if doc in report.stale_docs else "",
                    "shown": files[:_FILES_PER_DOC],
                    "hidden": max(0, len(files) - _FILES_PER_DOC),
                }
            )
        return rows
