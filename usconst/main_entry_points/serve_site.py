#!/usr/bin/env python3
"""
Preview Server - Main Entry Point

Serves the site directory over HTTP. Requests for the constitution page are
filtered on the server: the query string is sanitized into a filter state,
non-canonical queries are redirected to the canonical one, and the page is
returned with non-matching entries hidden. Every other path is served as a
static file from the site directory.

Usage:
    python -m usconst.main_entry_points.serve_site [--host HOST] [--port PORT] [--site-dir DIR]

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import argparse
import sys
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import unquote, urlparse

from usconst.config import BuildOptions, GENERATED_DIR, OutputPaths, SITE_DIR, ServerConfig
from usconst.constants import MimeTypes
from usconst.exceptions import FileProcessingException, USConstException
from usconst.modules.search_module import filter_page
from usconst.utils.file_utils import FileOperations
from usconst.utils.logging_decorators import configure_logging
from usconst.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)

PAGE_PATHS = ("/", "/index.html")

CONTENT_TYPES = {
    ".html": MimeTypes.HTML,
    ".json": f"{MimeTypes.JSON}; charset=utf-8",
    ".md": MimeTypes.TEXT,
    ".txt": MimeTypes.TEXT,
    ".css": MimeTypes.CSS,
    ".js": MimeTypes.JS,
    ".svg": MimeTypes.SVG,
}


@dataclass
class Response:
    """Status, headers and body of one response."""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)


def text_response(status: int, message: str) -> Response:
    return Response(status, message.encode("utf-8"), {"Content-Type": MimeTypes.TEXT})


def resolve_static(site_dir: Path, url_path: str) -> Optional[Path]:
    """
    Map a URL path onto a file below ``site_dir``.

    Returns None for paths that escape the site directory or do not name a file.
    """
    root = site_dir.resolve()
    try:
        candidate = (root / unquote(url_path).lstrip("/")).resolve()
    except ValueError:
        # embedded NUL byte
        return None
    if candidate != root and root not in candidate.parents:
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    return candidate if candidate.is_file() else None


def handle_page(site_dir: Path, url_path: str, query: str) -> Response:
    """Filter the constitution page for ``query``, redirecting to the canonical query."""
    page_file = site_dir / "index.html"
    index_path = site_dir / GENERATED_DIR.name / OutputPaths.SEARCH_INDEX_JSON

    page = filter_page(FileOperations.read_text(page_file), index_path, query)

    if query != page.canonical_query:
        location = f"{url_path}?{page.canonical_query}" if page.canonical_query else url_path
        return Response(302, headers={"Location": location})

    return Response(200, page.html.encode("utf-8"), {"Content-Type": MimeTypes.HTML})


def handle_request(site_dir: Path, raw_path: str) -> Response:
    """
    Build the response for a GET request.

    Args:
        site_dir: Directory that holds index.html and the generated files
        raw_path: Request target, including the query string

    Returns:
        Response to send
    """
    parsed = urlparse(raw_path)
    path = parsed.path or "/"

    try:
        if path in PAGE_PATHS:
            return handle_page(site_dir, path, parsed.query)

        file_path = resolve_static(site_dir, path)
        if file_path is None:
            return text_response(404, "Not found")

        content_type = CONTENT_TYPES.get(file_path.suffix.lower(), MimeTypes.BINARY)
        return Response(200, file_path.read_bytes(), {"Content-Type": content_type})

    except FileProcessingException as e:
        logger.error(f"Error serving {path}: {e}")
        return text_response(404, "Not found")
    except (USConstException, OSError) as e:
        logger.error(f"Error serving {path}: {type(e).__name__}: {e}", exc_info=True)
        return text_response(500, "Internal server error")


class RequestHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.0"
    site_dir: Path = SITE_DIR

    def send(self, response: Response):
        self.send_response(response.status)
        for name, value in response.headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.send_header("Connection", "close")
        self.end_headers()
        self.wfile.write(response.body)
        self.wfile.flush()

    def do_GET(self):
        self.send(handle_request(self.site_dir, self.path))

    def log_message(self, format, *args):
        logger.info(f"[{self.command}] {self.path} - {format % args}")


def make_handler(site_dir: Path):
    """Create a handler class bound to ``site_dir``."""
    return type("SiteRequestHandler", (RequestHandler,), {"site_dir": Path(site_dir)})


@configure_logging()
def main(host: str, port: int, site_dir: Path, log_level=None):
    site_dir = Path(site_dir)
    if not (site_dir / "index.html").exists():
        logger.error(f"No index.html in {site_dir}. Run usconst-build first.")
        return 1

    server = ThreadingHTTPServer((host, port), make_handler(site_dir))
    logger.info(f"Serving {site_dir} at http://{host}:{port}")
    logger.info("Press Ctrl+C to stop the server")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Server stopped.")
    finally:
        server.server_close()
    return 0


def run(argv=None):
    """Console script entry point."""
    parser = argparse.ArgumentParser(description="Serve the constitution site with server-side filtering")
    parser.add_argument("--host", default=ServerConfig.HOST, help=f"Interface to bind (default: {ServerConfig.HOST})")
    parser.add_argument("--port", type=int, default=ServerConfig.PORT, help=f"Port (default: {ServerConfig.PORT})")
    parser.add_argument("--site-dir", type=Path, default=SITE_DIR, help="Directory to serve (site/ or dist/)")
    parser.add_argument(
        "--log-level",
        choices=BuildOptions.LOG_LEVEL_CHOICES,
        default="info",
        help="Logging level - default: info",
    )
    args = parser.parse_args(argv)
    sys.exit(main(args.host, args.port, args.site_dir, log_level=args.log_level.upper()))


if __name__ == "__main__":
    run()
