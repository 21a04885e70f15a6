from .base import BaseChatClient, ChatMessage
from .openai_compatible import OpenAICompatibleClient

__all__ = ["BaseChatClient", "ChatMessage", "OpenAICompatibleClient"]
