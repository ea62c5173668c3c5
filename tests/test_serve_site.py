from bs4 import BeautifulSoup

from usconst.main_entry_points.serve_site import handle_request, make_handler, resolve_static


def test_page_with_canonical_query_is_filtered(built_paths):
    response = handle_request(built_paths.site_dir, "/?part=preamble")

    assert response.status == 200
    assert response.headers["Content-Type"].startswith("text/html")
    body = response.body.decode("utf-8")
    assert "Showing 1 of 7 entries." in body
    part_select = BeautifulSoup(body, "html.parser").find(id="part-filter")
    assert part_select.find("option", value="preamble").has_attr("selected")


def test_non_canonical_query_redirects(built_paths):
    response = handle_request(
        built_paths.site_dir,
        "/?q=&part=amendment&article=all&amendment=all&status=bogus",
    )
    assert response.status == 302
    assert response.headers["Location"] == "/?part=amendment"

    response = handle_request(built_paths.site_dir, "/index.html?part=all")
    assert response.status == 302
    assert response.headers["Location"] == "/index.html"


def test_default_page(built_paths):
    response = handle_request(built_paths.site_dir, "/")
    assert response.status == 200
    assert "Showing 7 of 7 entries." in response.body.decode("utf-8")


def test_static_files(built_paths):
    response = handle_request(built_paths.site_dir, "/generated/search-index.json")
    assert response.status == 200
    assert response.headers["Content-Type"].startswith("application/json")

    assert handle_request(built_paths.site_dir, "/nope.css").status == 404


def test_traversal_is_refused(built_paths):
    assert resolve_static(built_paths.site_dir, "/../data/constitution.json") is None
    assert resolve_static(built_paths.site_dir, "/%2e%2e/data/constitution.json") is None
    assert handle_request(built_paths.site_dir, "/../data/constitution.json").status == 404


def test_null_byte_path_is_not_found(built_paths):
    assert resolve_static(built_paths.site_dir, "/generated/%00.json") is None
    assert handle_request(built_paths.site_dir, "/generated/%00.json").status == 404
    assert handle_request(built_paths.site_dir, "/%00").status == 404


def test_handler_is_bound_to_site_dir(tmp_path):
    handler = make_handler(tmp_path)
    assert handler.site_dir == tmp_path


def test_page_with_malformed_index_records(built_paths):
    built_paths.search_index.write_text('[1, 2, "x"]', encoding="utf-8")

    response = handle_request(built_paths.site_dir, "/?part=preamble")
    assert response.status == 200
    assert "Showing 1 of 7 entries." in response.body.decode("utf-8")
