"""WebBrowser tool.

Reads the main text content of a web page.
"""

import re
from typing import Any, Dict, Optional

import httpx

from ....config.schemas import ToolSettings
from ..result import ToolResult

_BLOCK_TAGS_RE = re.compile(r"<(style|script|nav|footer)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s\s+")


def extract_page_text(html: str) -> str:
    """Strip markup from an HTML page.

    Drops style, script, nav and footer blocks, then every remaining tag, and
    collapses runs of whitespace.

    Args:
        html: Page source

    Returns:
        Plain page text
    """
    text = _BLOCK_TAGS_RE.sub("", html)
    text = _TAG_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


class WebBrowserTool:
    """Tool for reading the text of a web page."""

    def __init__(
        self,
        settings: Optional[ToolSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or ToolSettings()
        self.transport = transport

    @property
    def name(self) -> str:
        return "WebBrowser"

    @property
    def description(self) -> str:
        return "Get the main text content from a URL. Best for reading articles."

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "Web page to read (must start with http:// or https://)",
                }
            },
            "required": ["url"],
        }

    async def execute(self, **kwargs) -> ToolResult:
        """Read a web page.

        Args:
            url: Page URL

        Returns:
            ToolResult with the page text, cut to ``browser_max_chars``
        """
        url = kwargs.get("url", "").strip()
        if not url:
            return ToolResult.failure("URL parameter is required")

        if not url.startswith(("http://", "https://")):
            return ToolResult.failure("Invalid URL scheme: only HTTP and HTTPS are supported")

        try:
            async with httpx.AsyncClient(
                transport=self.transport,
                timeout=self.settings.timeout_seconds,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            return ToolResult.failure(
                f"Could not retrieve content from {url} ({e}). Check if the URL is correct and accessible."
            )

        if not response.is_success:
            return ToolResult.failure(f"Failed to fetch the webpage. Status: {response.status_code}")

        text = extract_page_text(response.text)
        if not text:
            return ToolResult(success=True, data="No content found.")

        return ToolResult.from_text(text, self.settings.browser_max_chars, marker="... (content truncated)")
