#!/usr/bin/env python3
"""ElyScan - static analysis result pipeline.

Usage:
    python main.py scan ./myproject                                  # all analyzers
    python main.py scan ./myproject --analyzers security,testing     # selected analyzers
    python main.py scan ./myproject --files a.go b.go                # individual files
    python main.py scan ./myproject --profile production_ready --report out/report
    python main.py scan --interactive                                # prompt for the target
    python main.py categories
    python main.py profiles
    python main.py locate
"""

import argparse
import json
import logging
import sys
import threading

from config.categories import CATEGORIES, PROFILES
from config.defaults import load_settings
from core.errors import EngineNotFoundError, ReportWriteError
from core.handoff import NoSelection, request_selection
from core.locator import locate_from_settings
from core.pipeline import AnalysisPipeline
from core.state import AnalysisRequest
from utils.report_naming import project_name_from_path, resolve_report_base


def _configure_logging(settings, verbose=False):
    level = logging.DEBUG if verbose else getattr(logging, settings["log_level"], logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _prompt_picker(handoff):
    """Read a target path from the terminal on a worker thread."""
    def ask():
        try:
            answer = input("Project folder to analyze: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            handoff.close()
            return
        handoff.respond(answer or None)

    threading.Thread(target=ask, daemon=True).start()


def _format_scores(scores, overall):
    lines = [f"Overall score: {overall:.1f}"]
    for s in scores:
        lines.append(
            f"  {s.display_name:28s} {s.score:6.1f}  "
            f"critical={s.critical_issues} warning={s.warning_issues} info={s.info_issues}"
        )
    return "\n".join(lines)


def _scan_types(args):
    if args.analyzers:
        return [a.strip() for a in args.analyzers.split(",") if a.strip()]
    if args.profile:
        return list(PROFILES[args.profile]["analyzers"])
    return []


def cmd_scan(args, settings):
    """Run one analysis and optionally write the report pair."""
    project_path = args.path
    if args.interactive and not project_path:
        try:
            project_path = request_selection(_prompt_picker)
        except NoSelection:
            print("No folder selected")
            return 1
    if not project_path:
        print("A project path is required (or use --interactive)")
        return 2

    timeout = args.timeout
    if timeout is None and args.profile:
        timeout = PROFILES[args.profile]["time_limit"]

    request = AnalysisRequest(
        project_path=project_path,
        scan_types=_scan_types(args),
        files=args.files or None,
    )
    pipeline = AnalysisPipeline(settings, engine_path=args.engine)
    result = pipeline.run(request, timeout=timeout)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(f"Status:  {'SUCCESS' if result.success else 'FAILED'}")
        print(result.message)
        if result.success:
            scores, overall = pipeline.category_scores(result)
            print()
            print(_format_scores(scores, overall))

    if args.report:
        base = resolve_report_base(args.report, project_name_from_path(project_path))
        try:
            html_path, json_path = pipeline.save_report(
                result, base, project_name_from_path(project_path),
            )
        except ReportWriteError as e:
            print(f"Error: {e}")
            return 1
        print(f"\nReports saved:\n- HTML: {html_path}\n- JSON: {json_path}")

    return 0 if result.success else 1


def cmd_locate(settings):
    try:
        path = locate_from_settings(settings)
    except EngineNotFoundError as e:
        print(str(e))
        return 1
    print(path)
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="elyscan",
        description="Run the analysis engine and score its findings",
    )
    subparsers = parser.add_subparsers(dest="command")

    scan_parser = subparsers.add_parser("scan", help="Analyze a project folder or files")
    scan_parser.add_argument("path", nargs="?", help="Project folder")
    scan_parser.add_argument("--analyzers", help="Comma-separated analyzer list")
    scan_parser.add_argument("--files", nargs="+", help="Analyze these files instead of the folder")
    scan_parser.add_argument("--profile", choices=sorted(PROFILES),
                             help="Analysis profile (analyzers + time limit)")
    scan_parser.add_argument("--engine", help="Path to the analysis engine (skip lookup)")
    scan_parser.add_argument("--timeout", type=int,
                             help="Engine timeout in seconds (0 disables)")
    scan_parser.add_argument("--report", help="Report base path or output folder")
    scan_parser.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    scan_parser.add_argument("--verbose", action="store_true", help="Debug logging")
    scan_parser.add_argument("--interactive", action="store_true",
                             help="Prompt for the project folder")

    subparsers.add_parser("categories", help="List analysis categories")
    subparsers.add_parser("profiles", help="List analysis profiles")
    subparsers.add_parser("locate", help="Show which engine binary would be used")

    args = parser.parse_args(argv)
    settings = load_settings()
    _configure_logging(settings, verbose=getattr(args, "verbose", False))

    if args.command == "scan":
        return cmd_scan(args, settings)
    if args.command == "categories":
        for cid, name in CATEGORIES:
            print(f"  {cid:18s} - {name}")
        return 0
    if args.command == "profiles":
        for key, profile in PROFILES.items():
            print(f"  {key:18s} - {profile['name']} ({profile['time_limit']}s): "
                  f"{', '.join(profile['analyzers'])}")
        return 0
    if args.command == "locate":
        return cmd_locate(settings)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
