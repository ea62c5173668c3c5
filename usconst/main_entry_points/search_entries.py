#!/usr/bin/env python3
"""
Entry Search - Main Entry Point

Queries the canonical data file with the same filter engine the page uses
and prints one ``id<TAB>title`` line per matching entry.

Usage:
    python -m usconst.main_entry_points.search_entries [QUERY] [--part P] [--article N]
        [--amendment N] [--status S] [--data FILE]

Invalid filter values fall back to "all", as they do on the page.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import argparse
import sys
from typing import List, Optional, TextIO, Tuple

from usconst.config import BuildOptions, get_build_paths
from usconst.exceptions import USConstException
from usconst.modules.content_generator_module import Entry, build_search_index, normalize
from usconst.modules.search_module import FilterState, build_active_filter_summary, matches_entry
from usconst.modules.search_module.page_filter import sanitize_for_records
from usconst.utils.file_utils import FileOperations
from usconst.utils.logging_decorators import configure_logging
from usconst.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)


def search(entries: List[Entry], raw: dict) -> Tuple[FilterState, List[Entry]]:
    """Sanitize ``raw`` against the entries' index records and return the matches."""
    records = build_search_index(entries)
    state = sanitize_for_records(raw, records)
    matches = [
        entry for entry, record in zip(entries, records)
        if matches_entry(record, state)
    ]
    return state, matches


def print_results(state: FilterState, matches: List[Entry], total: int, out: Optional[TextIO] = None):
    out = out or sys.stdout
    for entry in matches:
        out.write(f"{entry.id}\t{entry.title}\n")
    out.write(f"Showing {len(matches)} of {total} entries. ({build_active_filter_summary(state)})\n")


@configure_logging()
def main(args, log_level=None):
    try:
        paths = get_build_paths(config_path=args.config, data_file=args.data)
        entries = normalize(FileOperations.read_json(paths.data_file))
    except USConstException as e:
        logger.error(f"Could not load entries: {e}")
        return 1

    raw = {
        "q": args.query,
        "part": args.part,
        "article": args.article,
        "amendment": args.amendment,
        "status": args.status,
    }
    state, matches = search(entries, raw)
    print_results(state, matches, len(entries))
    return 0


def run(argv=None):
    """Console script entry point."""
    parser = argparse.ArgumentParser(description="Search the constitution entries")
    parser.add_argument("query", nargs="?", default="", help="Text to search for")
    parser.add_argument("--part", default=None, help="all, preamble, article or amendment")
    parser.add_argument("--article", default=None, help="Article number")
    parser.add_argument("--amendment", default=None, help="Amendment number")
    parser.add_argument("--status", default=None, help="all, active or repealed")
    parser.add_argument("--data", default=None, help="Canonical data file (constitution.json)")
    parser.add_argument("--config", default=None, help="YAML build configuration")
    parser.add_argument(
        "--log-level",
        choices=BuildOptions.LOG_LEVEL_CHOICES,
        default="warning",
        help="Logging level - default: warning",
    )
    args = parser.parse_args(argv)
    sys.exit(main(args, log_level=args.log_level.upper()))


if __name__ == "__main__":
    run()
