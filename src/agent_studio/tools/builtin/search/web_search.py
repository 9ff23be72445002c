"""GoogleSearch tool.

Web search is delegated to the text generator. With ``search_model`` set,
the request goes to a search-capable model whose URL citations are listed
as sources.
"""

from typing import Any, Dict, Optional

from ....agent.llm import TextGenerator
from ....config.schemas import ToolSettings
from ....models import Message, ModelParams
from ..result import ToolResult

SEARCH_INSTRUCTION = "You are a web search engine. Find current, reliable sources for the query and summarize them."
NO_RESULTS = "No relevant information found from Google Search."


class WebSearchTool:
    """Tool for searching the web through the text generator."""

    def __init__(self, generator: TextGenerator, settings: Optional[ToolSettings] = None) -> None:
        """Initialize the tool.

        Args:
            generator: Text generator that performs the search
            settings: Tool settings
        """
        self.generator = generator
        self.settings = settings or ToolSettings()

    @property
    def name(self) -> str:
        return "GoogleSearch"

    @property
    def description(self) -> str:
        return "Search the web for up-to-date information."

    @property
    def parameters(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query",
                }
            },
            "required": ["query"],
        }

    async def execute(self, **kwargs) -> ToolResult:
        """Search the web.

        Args:
            query: Search query

        Returns:
            ToolResult listing found sources, or the search reply text
        """
        query = kwargs.get("query", "").strip()
        if not query:
            return ToolResult.failure("Query parameter is required")

        history = [Message(role="user", content=f"Search for: {query}")]
        params = ModelParams(model=self.settings.search_model)

        try:
            completion = await self.generator.generate(history, SEARCH_INSTRUCTION, params)
        except Exception as e:
            return ToolResult.failure(f"Error during search: {e}")

        if completion.citations:
            sources = [
                f"- Title: {citation.title or 'N/A'}\n  URI: {citation.uri or 'N/A'}"
                for citation in completion.citations[: self.settings.search_max_results]
            ]
            return ToolResult(success=True, data="Found sources:\n" + "\n\n".join(sources))

        if completion.text.strip():
            return ToolResult(success=True, data=completion.text)

        return ToolResult(success=True, data=NO_RESULTS)
