"""Runs the content build from the canonical JSON to the spliced page.

Steps:
1. Read and normalize constitution.json
2. Render the table of contents and the entry content and splice them into
   the page template, so a template without markers fails before any write
3. Write the prerendered content and the search index to the generated directory
4. Write the LLM markdown export
5. Write the spliced page over the template (in place)

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import time
from dataclasses import dataclass
from typing import List, Optional

from usconst.config import BuildPaths
from usconst.logging_config import LoggerManager
from usconst.utils.file_utils import FileOperations
from usconst.utils.logging_utils import get_module_logger
from usconst.utils.progress_utils import progress_manager

from .normalize_entries import Entry, normalize
from .build_toc import build_toc
from .build_content import build_content
from .build_search_index import build_search_index
from .build_llm_markdown import build_llm_markdown
from .inject_template import inject_page

logger = get_module_logger(__name__)
metrics = LoggerManager.get_metrics_logger(__name__)

BUILD_STEPS = 5


@dataclass
class BuildResult:
    """Outcome of one content build."""
    entries: List[Entry]
    toc_html: str
    content_html: str
    llm_markdown: str
    page_html: str

    @property
    def entry_count(self) -> int:
        return len(self.entries)


def run_build(paths: BuildPaths, show_progress: Optional[bool] = None) -> BuildResult:
    """
    Generate all build artifacts for the given paths.

    Args:
        paths: Input and output locations
        show_progress: Force the progress bar on or off (auto-detect if None)

    Returns:
        BuildResult with the normalized entries and generated strings

    Raises:
        FileProcessingException: If an input cannot be read or an output written
        JSONParsingException: If the data file is not valid JSON
        EntryValidationException: If the data file contains invalid records
        TemplateMarkerException: If the page template lacks a marker pair
    """
    started = time.time()

    with progress_manager(enabled=show_progress) as pm:
        counter = pm.create_counter(total=BUILD_STEPS, desc="Building content", unit="steps")

        counter.set_description("Normalizing entries")
        raw = FileOperations.read_json(paths.data_file)
        entries = normalize(raw)
        counter.update()

        counter.set_description("Rendering HTML")
        toc_html = build_toc(entries)
        content_html = build_content(entries)
        source_html = FileOperations.read_text(paths.index_html)
        page_html = inject_page(source_html, toc_html, content_html)
        counter.update()

        counter.set_description("Writing generated files")
        FileOperations.ensure_directory(paths.generated_dir)
        FileOperations.write_text(paths.prerender_html, content_html)
        FileOperations.write_json(paths.search_index, build_search_index(entries))
        counter.update()

        counter.set_description("Writing markdown export")
        llm_markdown = build_llm_markdown(entries, source_name=paths.data_file.name)
        FileOperations.write_text(paths.llm_file, llm_markdown)
        counter.update()

        counter.set_description("Writing page")
        FileOperations.write_text(paths.index_html, page_html)
        counter.update()

    metrics.record_count("entries", len(entries))
    metrics.record_duration("content_build", time.time() - started)
    logger.info(
        f"Generated {len(entries)} entries into {paths.generated_dir}, "
        f"updated {paths.index_html}, and wrote {paths.llm_file}."
    )

    return BuildResult(
        entries=entries,
        toc_html=toc_html,
        content_html=content_html,
        llm_markdown=llm_markdown,
        page_html=page_html,
    )
