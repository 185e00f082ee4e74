"""SARIF 2.1.0 report output for code-scanning integrations."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from .. import __version__
from .model import Report

SARIF_SCHEMA = (
    "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"
)
SARIF_VERSION = "2.1.0"

_RULES: List[Dict[str, Any]] = [
    {
        "id": "stale-doc",
        "name": "Stale Documentation",
        "shortDescription": {"text": "Documentation may be out of date"},
        "fullDescription": {
            "text": "The source code referenced by this documentation has changed since the doc was last updated."
        },
        "defaultConfiguration": {"level": "warning"},
    },
    {
        "id": "undocumented-ref",
        "name": "Undocumented Reference",
        "shortDescription": {"text": "Documentation mentions a file that does not annotate it"},
        "fullDescription": {
            "text": "A source file is referenced from this documentation but carries no annotation pointing back to it."
        },
        "defaultConfiguration": {"level": "note"},
    },
]


class SARIFFormatter:
    def __init__(self, version: str | None = None) -> None:
        self.version = version or __version__

    def format(self, report: Report) -> str:
        results: List[Dict[str, Any]] = []
        for doc_path in sorted(report.stale_docs):
            stale = report.stale_docs[doc_path]
            results.append(
                {
                    "ruleId": "stale-doc",
                    "message": {
                        "text": (
                            f"Documentation '{doc_path}' may be out of date. "
                            f"{stale.files_changed} files changed since last update "
                            f"({stale.last_commit_info})."
                        )
                    },
                    "locations": [_location(doc_path)],
                }
            )
        for ref in report.undocumented_refs:
            results.append(
                {
                    "ruleId": "undocumented-ref",
                    "message": {
                        "text": f"'{ref.doc_path}' references '{ref.file_path}', which does not annotate it."
                    },
                    "locations": [_location(ref.doc_path, line=ref.line)],
                }
            )

        payload = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "docdiff",
                            "version": self.version,
                            "rules": _RULES,
                        }
                    },
                    "results": results,
                }
            ],
        }
        return json.dumps(payload, indent=2) + "\n"


def _location(uri: str, *, line: int | None = None) -> Dict[str, Any]:
    physical: Dict[str, Any] = {"artifactLocation": {"uri": uri}}
    if line is not None:
        physical["region"] = {"startLine": line}
    return {"physicalLocation": physical}
