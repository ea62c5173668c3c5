"""Content generator module for building the constitution page.

This module normalizes the canonical constitution.json data file and derives
every build artifact from it: the table of contents and entry markup spliced
into the page template, the search index used by the filter layer, and the
markdown export for LLM retrieval.

Modules:
    normalize_entries: Validation, derivation and ordering of entries
    build_toc: Table of contents markup
    build_content: Grouped entry markup with details disclosures
    build_search_index: Search index records
    build_llm_markdown: Markdown export
    inject_template: Marker-based splicing into the page template
    build_pipeline: Runs all steps for one set of paths

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from .normalize_entries import Entry, normalize
from .build_toc import build_toc
from .build_content import build_content
from .build_search_index import build_search_index
from .build_llm_markdown import build_llm_markdown
from .inject_template import inject_generated, inject_page
from .build_pipeline import BuildResult, run_build

__all__ = [
    'Entry',
    'normalize',
    'build_toc',
    'build_content',
    'build_search_index',
    'build_llm_markdown',
    'inject_generated',
    'inject_page',
    'BuildResult',
    'run_build',
]
