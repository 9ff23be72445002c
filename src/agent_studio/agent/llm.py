"""Text generation for agent studio.

This module defines the TextGenerator collaborator used by the reasoning
loop and the tools, plus LLMClient, its implementation for OpenAI-compatible
APIs.
"""

import os
from typing import Any, Optional, Protocol

from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from ..config.schemas import LLMConfig
from ..models import KnowledgeDocument, Message, ModelParams
from ..utils import get_logger

logger = get_logger(__name__)


class ContextLimitError(Exception):
    """Exception raised when LLM context limit is exceeded."""

    pass


class Citation(BaseModel):
    """A grounding source returned along with a completion."""

    title: str = ""
    uri: str = ""


class Completion(BaseModel):
    """Result of one generation request.

    Attributes:
        text: Completion text
        citations: Grounding sources, if the model returned any
    """

    text: str = ""
    citations: list[Citation] = Field(default_factory=list)


class TextGenerator(Protocol):
    """Produces a completion for a conversation.

    Implementations must accept the same, growing history on every call.
    """

    async def generate(
        self,
        history: list[Message],
        system_instruction: str,
        model_params: Optional[ModelParams] = None,
    ) -> Completion:
        ...


class LLMClient:
    """LLM client wrapper for OpenAI-compatible APIs.

    Supports OpenAI, DeepSeek, GLM, Ollama, and custom endpoints.
    """

    def __init__(self, config: LLMConfig, client: Optional[AsyncOpenAI] = None) -> None:
        """Initialize the LLM client.

        Args:
            config: LLM configuration
            client: Preconfigured OpenAI client, built from ``config`` if omitted
        """
        self.config = config

        if client is None:
            api_key = os.environ.get(config.api_key_env, "")
            if not api_key and config.api_type not in ["ollama", "custom"]:
                logger.warning(f"API key not found for {config.api_key_env}")

            # No silent retries: a failed call surfaces as a run failure
            client = AsyncOpenAI(
                base_url=config.endpoint,
                api_key=api_key if api_key else "not-needed",  # Ollama doesn't need API key
                max_retries=0,
            )
        self.client = client

    async def generate(
        self,
        history: list[Message],
        system_instruction: str,
        model_params: Optional[ModelParams] = None,
    ) -> Completion:
        """Generate a completion for the conversation.

        Args:
            history: Conversation turns, oldest first
            system_instruction: Instruction sent as the system message
            model_params: Per-request overrides

        Returns:
            Completion with text and citations

        Raises:
            ContextLimitError: If context limit is exceeded
        """
        params = self._request_params(model_params)
        params["messages"] = self._prepare_messages(history, system_instruction)

        try:
            response = await self.client.chat.completions.create(**params)
        except Exception as e:
            error_str = str(e).lower()
            if "context" in error_str and ("limit" in error_str or "length" in error_str):
                raise ContextLimitError(f"LLM context limit exceeded: {e}") from e
            logger.error(f"LLM completion error: {e}")
            raise

        if not response.choices:
            return Completion()

        message = response.choices[0].message
        return Completion(text=message.content or "", citations=self._extract_citations(message))

    def _request_params(self, model_params: Optional[ModelParams]) -> dict[str, Any]:
        """Merge per-request overrides with configured defaults."""
        model_params = model_params or ModelParams()
        params: dict[str, Any] = {"model": model_params.model or self.config.model}

        temperature = model_params.temperature
        if temperature is None:
            temperature = self.config.temperature
        params["temperature"] = temperature

        max_tokens = model_params.max_output_tokens or self.config.max_tokens
        if max_tokens:
            params["max_tokens"] = max_tokens

        return params

    def _prepare_messages(self, history: list[Message], system_instruction: str) -> list[dict[str, Any]]:
        """Convert conversation turns to chat messages.

        Args:
            history: Conversation turns
            system_instruction: System message text

        Returns:
            List of message dictionaries
        """
        messages: list[dict[str, Any]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})

        for msg in history:
            role = "assistant" if msg.is_from_model() else "user"
            if msg.attachments and role == "user":
                parts: list[dict[str, Any]] = [{"type": "text", "text": msg.content}]
                parts.extend(self._attachment_part(doc) for doc in msg.attachments)
                messages.append({"role": role, "content": parts})
            else:
                messages.append({"role": role, "content": msg.content})

        return messages

    @staticmethod
    def _attachment_part(document: KnowledgeDocument) -> dict[str, Any]:
        if document.mime_type.startswith("image/"):
            return {
                "type": "image_url",
                "image_url": {"url": f"data:{document.mime_type};base64,{document.content}"},
            }
        return {
            "type": "text",
            "text": f"[Attached file '{document.name}' ({document.mime_type}) cannot be displayed as text]",
        }

    @staticmethod
    def _extract_citations(message: Any) -> list[Citation]:
        citations: list[Citation] = []
        for annotation in getattr(message, "annotations", None) or []:
            if getattr(annotation, "type", None) != "url_citation":
                continue
            source = annotation.url_citation
            citations.append(Citation(title=source.title or "", uri=source.url or ""))
        return citations
