import os

os.environ.setdefault("USCONST_ENV", "test")

import shutil
from pathlib import Path

import pytest

from usconst.config import BuildPaths
from usconst.modules.content_generator_module import normalize

REPO_ROOT = Path(__file__).resolve().parents[1]
TEMPLATE_HTML = REPO_ROOT / "site" / "index.html"


def make_raw_entries():
    return [
        {
            "id": "amend18-s1",
            "type": "amendment",
            "section": 1,
            "text": "The manufacture, sale, or transportation of intoxicating liquors is hereby prohibited.",
            "searchTags": ["prohibition"],
            "position": 6,
            "ratifiedOn": "1919-01-16",
            "repealedOn": "1933-12-05",
        },
        {
            "id": "preamble",
            "type": "preamble",
            "text": "We the People of the United States, in Order to form a more perfect Union.",
            "searchTags": ["we the people"],
            "position": 1,
        },
        {
            "id": "art1-s1",
            "type": "article",
            "article": 1,
            "section": 1,
            "text": "All legislative Powers herein granted shall be vested in a Congress.",
            "searchTags": ["congress"],
            "position": 2,
        },
        {
            "id": "art1-s8-c3",
            "type": "article",
            "article": 1,
            "section": 8,
            "clause": 3,
            "text": "To regulate Commerce with foreign Nations, and among the several States.",
            "searchTags": ["commerce clause"],
            "position": 3,
        },
        {
            "id": "art7",
            "type": "article",
            "article": 7,
            "text": "The Ratification of the Conventions of nine States, shall be sufficient.",
            "position": 4,
        },
        {
            "id": "amend1-1",
            "type": "amendment",
            "clause": 1,
            "text": "Congress shall make no law abridging the freedom of speech, or of the press.",
            "searchTags": ["free speech"],
            "position": 5,
            "ratifiedOn": "1791-12-15",
        },
        {
            "id": "amend21-s1",
            "type": "amendment",
            "section": 1,
            "text": "The eighteenth article of amendment to the Constitution is hereby repealed.",
            "position": 7,
            "ratifiedOn": "1933-12-05",
        },
    ]


@pytest.fixture
def raw_entries():
    return make_raw_entries()


@pytest.fixture
def entries(raw_entries):
    return normalize(raw_entries)


@pytest.fixture
def build_paths(tmp_path, raw_entries):
    """Build paths in a temporary site, with the repository template and the sample data."""
    from usconst.utils.file_utils import FileOperations

    site_dir = tmp_path / "site"
    site_dir.mkdir()
    shutil.copy(TEMPLATE_HTML, site_dir / "index.html")
    data_file = tmp_path / "data" / "constitution.json"
    FileOperations.write_json(data_file, raw_entries)

    return BuildPaths(
        data_file=data_file,
        index_html=site_dir / "index.html",
        generated_dir=site_dir / "generated",
        llm_file=tmp_path / "llm.md",
        dist_dir=tmp_path / "dist",
    )


@pytest.fixture
def built_paths(build_paths):
    """Build paths after one content build."""
    from usconst.modules.content_generator_module import run_build

    run_build(build_paths, show_progress=False)
    return build_paths
