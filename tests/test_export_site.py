import pytest

from usconst.config import BuildPaths
from usconst.exceptions import InvalidConfigurationException
from usconst.modules.site_generator_module.export_site import export_site


def test_export_copies_site_and_markdown(built_paths):
    (built_paths.site_dir / "assets").mkdir()
    (built_paths.site_dir / "assets" / "style.css").write_text("body{}", encoding="utf-8")

    written = export_site(built_paths, minify=False, show_progress=False)
    dist = built_paths.dist_dir

    assert (dist / "index.html").read_text(encoding="utf-8") == \
        built_paths.index_html.read_text(encoding="utf-8")
    assert (dist / "generated" / "search-index.json").exists()
    assert not (dist / "generated" / "constitution-prerender.html").exists()
    assert (dist / "assets" / "style.css").read_text(encoding="utf-8") == "body{}"
    assert (dist / "llm.md").exists()
    assert dist / "llm.md" in written


def test_export_clears_previous_output(built_paths):
    stale = built_paths.dist_dir / "stale.txt"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")

    export_site(built_paths, minify=False, show_progress=False)
    assert not stale.exists()


def test_minified_export_keeps_entries(built_paths):
    export_site(built_paths, minify=True, show_progress=False)
    html = (built_paths.dist_dir / "index.html").read_text(encoding="utf-8")
    assert "data-entry-id" in html
    assert len(html) < len(built_paths.index_html.read_text(encoding="utf-8"))


def test_output_inside_site_is_rejected(built_paths):
    paths = BuildPaths(
        data_file=built_paths.data_file,
        index_html=built_paths.index_html,
        generated_dir=built_paths.generated_dir,
        llm_file=built_paths.llm_file,
        dist_dir=built_paths.site_dir / "dist",
    )
    with pytest.raises(InvalidConfigurationException):
        export_site(paths, minify=False, show_progress=False)
