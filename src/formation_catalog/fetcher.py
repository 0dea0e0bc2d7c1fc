"""Document fetchers: HTTP and local filesystem."""

from pathlib import Path

import requests
from loguru import logger

from formation_catalog.config import FETCH_FALLBACK_CONTENT, FETCH_TIMEOUT_SECONDS
from formation_catalog.protocols import FetcherProtocol


class HttpDocumentFetcher:
    """Fetch documents from a static content server."""

    def __init__(self, base_url: str, *, timeout: float = FETCH_TIMEOUT_SECONDS) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.sess = requests.Session()
        logger.debug("HTTP fetcher ready: base_url {!r}", self.base_url)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def fetch(self, path: str) -> str:
        """Return the document text, or the fallback text on any failure."""
        url = self.url_for(path)
        logger.debug("Fetching {!r}", url)
        try:
            r = self.sess.get(url, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error("Unable to load {}: {}", url, e)
            return FETCH_FALLBACK_CONTENT
        # Static servers often omit the charset for text/markdown.
        r.encoding = "utf-8"
        return r.text


class FileDocumentFetcher:
    """Fetch documents from a local content directory."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser().resolve()
        logger.debug("File fetcher ready: root {!r}", str(self.root))

    def fetch(self, path: str) -> str:
        """Return the document text, or the fallback text on any failure."""
        fname = (self.root / path.lstrip("/")).resolve()
        if not fname.is_relative_to(self.root):
            logger.error("Path escapes content root: {!r}", path)
            return FETCH_FALLBACK_CONTENT
        try:
            return fname.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Unable to load {}: {}", fname, e)
            return FETCH_FALLBACK_CONTENT


def make_fetcher(content_root: str) -> FetcherProtocol:
    """Pick an HTTP or filesystem fetcher depending on the content root."""
    if content_root.startswith(("http://", "https://")):
        return HttpDocumentFetcher(content_root)
    return FileDocumentFetcher(content_root)
