"""Conversation entities for agent studio.

This module defines the turns of the conversation a reasoning loop sends to
the text generator.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .agent import KnowledgeDocument


class Message(BaseModel):
    """Represents a turn in the conversation history.

    Attributes:
        role: Turn author ("user" or "model")
        content: Turn text
        attachments: Binary documents sent along with the turn
        timestamp: Turn timestamp
    """

    role: Literal["user", "model"] = Field(..., description="Turn author")
    content: str = Field(..., description="Turn text")
    attachments: list[KnowledgeDocument] = Field(default_factory=list, description="Binary documents")
    timestamp: datetime = Field(default_factory=datetime.now, description="Turn timestamp")

    def is_from_model(self) -> bool:
        return self.role == "model"
