"""Tests for the HttpRequest and WebBrowser tools using httpx.MockTransport."""

import httpx
import pytest

from agent_studio.config.schemas import ToolSettings
from agent_studio.tools.builtin.network import HttpRequestTool, WebBrowserTool, extract_page_text

PAGE = """
<html>
  <head><style>body { color: red; }</style><script>var x = 1;</script></head>
  <body>
    <nav><a href="/">Home</a></nav>
    <h1>Title</h1>
    <p>First   paragraph.</p>
    <p>Second paragraph.</p>
    <footer>Copyright</footer>
  </body>
</html>
"""


def mock_transport(status_code: int = 200, text: str = "", seen: list = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(str(request.url))
        return httpx.Response(status_code, text=text)

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
class TestHttpRequestTool:
    async def test_returns_body(self):
        seen = []
        tool = HttpRequestTool(transport=mock_transport(text='{"ok": true}', seen=seen))
        result = await tool.execute(url="https://api.example.com/status")
        assert result.success
        assert result.to_content() == '{"ok": true}'
        assert seen == ["https://api.example.com/status"]

    async def test_truncates_long_body(self):
        tool = HttpRequestTool(ToolSettings(http_max_chars=10), transport=mock_transport(text="x" * 50))
        result = await tool.execute(url="https://example.com")
        assert result.truncated
        assert result.to_content() == "x" * 10 + "... (truncated)"

    async def test_non_success_status(self):
        tool = HttpRequestTool(transport=mock_transport(status_code=404))
        result = await tool.execute(url="https://example.com/missing")
        assert result.to_content() == "Error: Received status 404 from https://example.com/missing"

    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        tool = HttpRequestTool(transport=httpx.MockTransport(handler))
        result = await tool.execute(url="https://down.example.com")
        assert not result.success
        assert "Failed to fetch from URL https://down.example.com" in result.error

    async def test_rejects_other_schemes(self):
        result = await HttpRequestTool().execute(url="file:///etc/passwd")
        assert "Invalid URL scheme" in result.error


@pytest.mark.asyncio
class TestWebBrowserTool:
    async def test_extracts_text(self):
        tool = WebBrowserTool(transport=mock_transport(text=PAGE))
        result = await tool.execute(url="https://example.com/article")
        assert result.to_content() == "Title First paragraph. Second paragraph."

    async def test_truncates_to_browser_limit(self):
        tool = WebBrowserTool(ToolSettings(browser_max_chars=5), transport=mock_transport(text="<p>abcdefghij</p>"))
        result = await tool.execute(url="https://example.com")
        assert result.to_content() == "abcde... (content truncated)"

    async def test_error_status(self):
        tool = WebBrowserTool(transport=mock_transport(status_code=500))
        result = await tool.execute(url="https://example.com")
        assert result.to_content() == "Error: Failed to fetch the webpage. Status: 500"


def test_extract_page_text_drops_blocks():
    text = extract_page_text(PAGE)
    assert "color" not in text
    assert "var x" not in text
    assert "Home" not in text
    assert "Copyright" not in text
