"""
Web page document - fetched over HTTP on every access.

The page is converted to plain text with html2text. Script, style and
<head> content are dropped by the converter, links and images are reduced
to their visible text.
"""

import logging
import os
from typing import Optional

import html2text
import requests

from .base import BaseDocument

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = float(os.getenv("DOCSEARCH_FETCH_TIMEOUT", "10"))
USER_AGENT = "docsearch/0.1"


def html_to_text(html_string: str) -> str:
    """
    Strip markup from an HTML page.

    Args:
        html_string: Raw HTML

    Returns:
        Visible page text, without line wrapping
    """
    converter = html2text.HTML2Text()
    converter.ignore_links = True  # Keep link text, drop URLs
    converter.ignore_images = True
    converter.ignore_emphasis = True  # No ** / _ markers glued to words
    converter.ignore_tables = True  # Cell text only, no | separators
    converter.body_width = 0  # No line wrapping

    return converter.handle(html_string)


class WebDocument(BaseDocument):
    """
    Document backed by a remote HTML page.

    No caching: each get_text() call performs a new request, so the text may
    differ between calls. Any network or HTTP error yields "".
    """

    def __init__(self, doc_id: int, url: str, timeout: Optional[float] = None):
        """
        Args:
            doc_id: Caller-assigned document ID
            url: Page URL (http or https)
            timeout: Connect/read timeout in seconds
                Default: DOCSEARCH_FETCH_TIMEOUT env var (10s)
        """
        super().__init__(doc_id)
        self.url = url
        self.timeout = timeout if timeout is not None else DEFAULT_FETCH_TIMEOUT

    @property
    def source(self) -> str:
        return self.url

    def get_text(self) -> str:
        try:
            response = requests.get(
                self.url,
                timeout=self.timeout,
                headers={"User-Agent": USER_AGENT},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Error fetching URL {self.url}: {e}")
            return ""

        try:
            text = html_to_text(response.text)
        except Exception as e:
            logger.warning(f"Error parsing HTML from {self.url}: {e}")
            return ""

        logger.debug(f"Fetched {len(text)} chars from {self.url}")
        return text
