"""Module for exporting the built site into a deployable output directory.

This module copies the site directory (the spliced page, other pages, the
generated search index and static assets) into the output directory. HTML
files are written through the minifier unless minification is disabled, and
the markdown export is placed next to the pages.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import shutil
from pathlib import Path
from typing import List

from usconst.config import BuildPaths, OutputPaths
from usconst.exceptions import FileProcessingException, InvalidConfigurationException
from usconst.utils.file_utils import FileOperations
from usconst.utils.html_utils import write_html
from usconst.utils.logging_utils import get_module_logger
from usconst.utils.progress_utils import progress_manager

logger = get_module_logger(__name__)

# Build inputs that have no place in the deployed site
EXCLUDED_FILES = {OutputPaths.PRERENDER_HTML}


def collect_site_files(site_dir: Path) -> List[Path]:
    """List the files of the site directory that belong in the export."""
    return sorted(
        path for path in site_dir.rglob("*")
        if path.is_file() and path.name not in EXCLUDED_FILES
    )


def export_site(paths: BuildPaths, minify: bool = True, show_progress: bool = None) -> List[Path]:
    """
    Copy the built site into ``paths.dist_dir``.

    The output directory is emptied first.

    Args:
        paths: Build paths (site directory, markdown export, output directory)
        minify: Whether to minify HTML files
        show_progress: Force the progress bar on or off (auto-detect if None)

    Returns:
        Written files

    Raises:
        FileProcessingException: If a file cannot be copied or written
    """
    site_dir = paths.site_dir
    output_dir = paths.dist_dir

    resolved_site, resolved_output = site_dir.resolve(), output_dir.resolve()
    if resolved_output == resolved_site or resolved_site in resolved_output.parents \
            or resolved_output in resolved_site.parents:
        raise InvalidConfigurationException(
            "dist_dir", f"must not overlap the site directory {site_dir}"
        )

    if output_dir.exists():
        shutil.rmtree(output_dir)
    FileOperations.ensure_directory(output_dir)

    files = collect_site_files(site_dir)
    written: List[Path] = []
    error_counter = 0

    with progress_manager(enabled=show_progress) as pm:
        counter = pm.create_counter(total=len(files), desc="Exporting site", unit="files")
        for source in files:
            target = output_dir / source.relative_to(site_dir)
            try:
                if source.suffix == ".html":
                    write_html(
                        FileOperations.read_text(source),
                        target,
                        minify=minify,
                        source_path=source,
                    )
                else:
                    FileOperations.copy_file(source, target)
                written.append(target)
            except FileProcessingException as e:
                error_counter += 1
                logger.error(f"Error exporting {source}: {e}")
            counter.update()

    if paths.llm_file.exists():
        target = output_dir / paths.llm_file.name
        FileOperations.copy_file(paths.llm_file, target)
        written.append(target)
    else:
        logger.warning(f"Markdown export not found, skipping: {paths.llm_file}")

    if error_counter:
        raise FileProcessingException(output_dir, f"export {error_counter} of {len(files)} files")

    logger.info(f"Exported {len(written)} files to {output_dir} (minified={minify})")
    return written
