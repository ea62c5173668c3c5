#!/usr/bin/env python3
"""
Content Build Pipeline - Main Entry Point

This module generates the constitution page from the canonical data file:
1. Normalizes constitution.json into ordered entries
2. Writes the prerendered content and the search index to site/generated/
3. Writes the markdown export (llm.md)
4. Splices table of contents and content into site/index.html
5. Optionally exports the site into the output directory

Usage:
    python -m usconst.main_entry_points.build_content [options]

Options:
    --data: Canonical data file (default: data/constitution.json)
    --template: Page template to splice into (default: site/index.html)
    --generated-dir: Directory for generated artifacts
    --llm: Markdown export path
    --config: YAML build configuration
    --export: Copy the built site into the output directory
    --dist: Output directory for --export
    --no-minify: Do not minify exported HTML

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import argparse
import sys

from usconst.config import BuildOptions, get_build_paths, validate_config
from usconst.exceptions import USConstException
from usconst.modules.content_generator_module import run_build
from usconst.modules.site_generator_module.export_site import export_site
from usconst.utils.logging_decorators import configure_logging
from usconst.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)


@configure_logging()
def main(args, log_level=None):
    """Run the content build (and the export when requested). Returns the exit code."""
    try:
        paths = get_build_paths(
            config_path=args.config,
            data_file=args.data,
            index_html=args.template,
            generated_dir=args.generated_dir,
            llm_file=args.llm,
            dist_dir=args.dist,
        )
        validate_config(paths)
        logger.debug(f"Resolved build paths: {paths}")

        show_progress = False if args.no_progress else None
        result = run_build(paths, show_progress=show_progress)

        if args.export:
            written = export_site(paths, minify=not args.no_minify, show_progress=show_progress)
            logger.info(f"Export finished: {len(written)} files in {paths.dist_dir}")

    except USConstException as e:
        logger.error(f"Content build failed: {e}")
        return 1

    logger.info(f"Content build finished with {result.entry_count} entries")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate the constitution page, search index and markdown export"
    )
    parser.add_argument("--data", default=None, help="Canonical data file (constitution.json)")
    parser.add_argument("--template", default=None, help="Page template with generation markers")
    parser.add_argument("--generated-dir", default=None, help="Directory for generated artifacts")
    parser.add_argument("--llm", default=None, help="Markdown export path")
    parser.add_argument("--config", default=None, help="YAML build configuration (default: usconst.yaml)")
    parser.add_argument(
        "--export",
        action="store_true",
        help="Copy the built site into the output directory after building",
    )
    parser.add_argument("--dist", default=None, help="Output directory for --export")
    parser.add_argument(
        "--no-minify",
        action="store_true",
        help="Disable minification of exported HTML",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars",
    )
    parser.add_argument(
        "--log-level",
        choices=BuildOptions.LOG_LEVEL_CHOICES,
        default="info",
        help="Logging level - default: info",
    )
    return parser


def run(argv=None):
    """Console script entry point."""
    args = build_parser().parse_args(argv)
    sys.exit(main(args, log_level=args.log_level.upper()))


if __name__ == "__main__":
    run()
