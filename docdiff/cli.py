"""CLI entrypoints for docdiff commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .git import GitError
from .logging import configure_logging
from .orchestrator import DocumentNotTrackedError, Orchestrator
from .stores import MetadataError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docdiff",
        description=(
            "Detect stale documentation across your codebase. Link source files to docs "
            "with annotations in comments, e.g. `// @doc docs/API.md`."
        ),
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--dir",
        default=".",
        help="Project root directory (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser(
        "init",
        help="Initialize documentation version tracking at the current HEAD.",
    )
    _add_verbose_option(init_parser, suppress_default=True)
    init_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite an existing metadata file.",
    )

    sync_parser = subparsers.add_parser(
        "sync",
        help="Update documentation version metadata to the current HEAD.",
    )
    _add_verbose_option(sync_parser, suppress_default=True)
    sync_parser.add_argument(
        "doc",
        nargs="?",
        help="Only sync this doc (defaults to every tracked doc).",
    )

    changes_parser = subparsers.add_parser(
        "changes",
        help="Show code changes since a doc was last updated.",
    )
    _add_verbose_option(changes_parser, suppress_default=True)
    changes_parser.add_argument("doc", help="Tracked documentation file, e.g. docs/API.md.")
    changes_mode = changes_parser.add_mutually_exclusive_group()
    changes_mode.add_argument(
        "--commits",
        dest="mode",
        action="store_const",
        const="commits",
        help="Show the commit list only.",
    )
    changes_mode.add_argument(
        "--summary",
        dest="mode",
        action="store_const",
        const="summary",
        help="Output a Markdown summary with per-commit diffs.",
    )
    changes_mode.add_argument(
        "--ai",
        dest="mode",
        action="store_const",
        const="ai",
        help="Output a context document for assisted documentation updates.",
    )
    changes_parser.set_defaults(mode="default")

    report_parser = subparsers.add_parser(
        "report",
        help="Show documentation coverage and staleness.",
    )
    _add_verbose_option(report_parser, suppress_default=True)
    report_view = report_parser.add_mutually_exclusive_group()
    for view, help_text in (
        ("stale", "Only show stale docs."),
        ("orphaned", "Only show orphaned files."),
        ("undocumented", "Only show undocumented references."),
    ):
        report_view.add_argument(
            f"--{view}", dest="view", action="store_const", const=view, help=help_text
        )
    report_format = report_parser.add_mutually_exclusive_group()
    report_format.add_argument(
        "--json",
        dest="output_format",
        action="store_const",
        const="json",
        help="Output as JSON.",
    )
    report_format.add_argument(
        "--sarif",
        dest="output_format",
        action="store_const",
        const="sarif",
        help="Output as SARIF for CI integration.",
    )
    report_parser.add_argument(
        "--ci",
        action="store_true",
        help="Exit with status 1 when the configured CI checks fail.",
    )
    report_parser.add_argument(
        "--depth",
        type=int,
        default=1,
        help="Directory depth for the coverage breakdown (0 disables it).",
    )
    report_parser.set_defaults(view="full", output_format="text")

    graph_parser = subparsers.add_parser(
        "graph",
        help="Output the doc-to-file relationship graph (DOT by default).",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    graph_parser.add_argument(
        "--mermaid",
        action="store_true",
        help="Output Mermaid instead of DOT.",
    )

    languages_parser = subparsers.add_parser(
        "languages",
        help="List supported languages and their file extensions.",
    )
    _add_verbose_option(languages_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docdiff commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()
    root = args.dir

    try:
        if args.command == "init":
            _run_init(orchestrator, root, force=bool(args.force))
        elif args.command == "sync":
            _run_sync(orchestrator, root, args.doc)
        elif args.command == "changes":
            sys.stdout.write(orchestrator.run_changes(root, args.doc, mode=args.mode))
        elif args.command == "report":
            outcome = orchestrator.run_report(
                root,
                view=args.view,
                output_format=args.output_format,
                depth=args.depth,
                ci=bool(args.ci),
            )
            sys.stdout.write(outcome.output)
            if outcome.failure is not None:
                parser.exit(1, f"{outcome.failure}\n")
        elif args.command == "graph":
            sys.stdout.write(orchestrator.run_graph(root, mermaid=bool(args.mermaid)))
        elif args.command == "languages":
            for strategy in orchestrator.languages(root).all_strategies():
                print(f"{strategy.name}: {' '.join(strategy.extensions)}")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, FileExistsError, NotADirectoryError, DocumentNotTrackedError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, MetadataError, GitError) as exc:
        parser.exit(1, f"docdiff {args.command} failed: {exc}\n")
    except RuntimeError as exc:
        parser.exit(1, f"docdiff {args.command} failed: {exc}\nRun with --verbose for more details.\n")


def _run_init(orchestrator: Orchestrator, root: str, *, force: bool) -> None:
    outcome = orchestrator.run_init(root, force=force)
    print(
        f"Initialized documentation tracking with {len(outcome.versions)} docs at {outcome.head}"
    )
    print()
    for doc in sorted(outcome.versions):
        print(f"  {doc}: {outcome.versions[doc]}")
    print(f"\nMetadata written to {_relativize(outcome.metadata_path)}")


def _run_sync(orchestrator: Orchestrator, root: str, doc: str | None) -> None:
    outcome = orchestrator.run_sync(root, doc)
    if doc is not None:
        if outcome.updated:
            _, previous = outcome.updated[0]
            print(f"Updated {doc}: {previous} -> {outcome.head}")
        else:
            print(f"{doc} is already at {outcome.head}")
        return

    print(f"Syncing all docs to HEAD ({outcome.head})...")
    print()
    if not outcome.updated:
        print("All docs already at current HEAD.")
        return
    for name, previous in outcome.updated:
        print(f"  {name}: {previous} -> {outcome.head}")
    print(
        f"\nUpdated {len(outcome.updated)} docs, {len(outcome.already_current)} already current."
    )


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
