from abc import ABC, abstractmethod
from typing import List, Literal, Sequence

from pydantic import BaseModel, ConfigDict

from aivsai.config.models import ProviderConfig

DEFAULT_TEMPERATURE = 0.7


class ChatMessage(BaseModel):
    """One message of a single API exchange"""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)


class ChatRequest(BaseModel):
    """Request body sent to a chat-completions endpoint"""

    model: str
    messages: List[ChatMessage]
    temperature: float = DEFAULT_TEMPERATURE


class MessageContent(BaseModel):
    content: str


class ChatChoice(BaseModel):
    message: MessageContent


class ChatResponse(BaseModel):
    """The part of a chat-completions response body we rely on"""

    choices: List[ChatChoice]


class BaseChatClient(ABC):
    """Abstract base for chat-completion clients"""

    @abstractmethod
    async def complete(self, config: ProviderConfig, messages: Sequence[ChatMessage]) -> str:
        """Run one stateless exchange and return the first choice's content.

        Raises:
            ProviderError: transport failure, non-success status, malformed
                body or empty choice list.
        """
        pass

    async def aclose(self) -> None:
        """Release network resources held by the client"""
        return None
