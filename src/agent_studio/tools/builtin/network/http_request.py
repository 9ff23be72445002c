"""HttpRequest tool.

Fetches raw content from a URL or API endpoint via HTTP GET.
"""

from typing import Any, Dict, Optional

import httpx

from ....config.schemas import ToolSettings
from ..result import ToolResult


class HttpRequestTool:
    """Tool for fetching data from a URL.

    Only HTTP/HTTPS URLs are allowed. The body is cut to
    ``settings.http_max_chars`` characters.
    """

    def __init__(
        self,
        settings: Optional[ToolSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the tool.

        Args:
            settings: Tool settings
            transport: httpx transport, e.g. a MockTransport in tests
        """
        self.settings = settings or ToolSettings()
        self.transport = transport

    @property
    def name(self) -> str:
        return "HttpRequest"

    @property
    def description(self) -> str:
        return "Make a GET request to a URL to fetch data, e.g., from an API."

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "url": {
                    "type": "string",
                    "description": "URL to fetch (must start with http:// or https://)",
                }
            },
            "required": ["url"],
        }

    async def execute(self, **kwargs) -> ToolResult:
        """Fetch content from URL.

        Args:
            url: URL to fetch

        Returns:
            ToolResult with the response body or error
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
        except httpx.TimeoutException:
            return ToolResult.failure(f"Request to {url} timed out")
        except httpx.HTTPError as e:
            return ToolResult.failure(f"Failed to fetch from URL {url}: {e}")

        if not response.is_success:
            return ToolResult.failure(f"Received status {response.status_code} from {url}")

        return ToolResult.from_text(response.text, self.settings.http_max_chars)
