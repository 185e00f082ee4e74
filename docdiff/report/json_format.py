"""JSON report output."""

from __future__ import annotations

import json
from dataclasses import asdict

from .model import Report


class JSONFormatter:
    def format(self, report: Report) -> str:
        payload = {
            "metadata": dict(sorted(report.metadata.items())),
            "stale_docs": {
                path: asdict(report.stale_docs[path]) for path in sorted(report.stale_docs)
            },
            "files_by_doc": {doc: list(files) for doc, files in report.files_by_doc.items()},
            "orphaned_files": list(report.orphaned_files),
            "undocumented_refs": [asdict(ref) for ref in report.undocumented_refs],
            "directory_coverage": [
                {
                    "directory": entry.directory,
                    "total_files": entry.total_files,
                    "documented_files": entry.documented_files,
                    "coverage_percent": entry.coverage_percent,
                }
                for entry in report.directory_coverage
            ],
            "summary": asdict(report.summary),
        }
        return json.dumps(payload, indent=2) + "\n"
