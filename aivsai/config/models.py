from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

COMPLETIONS_PATH = "/chat/completions"


class ProviderSettings(BaseModel):
    """Provider entry as written in config.yaml (no secrets)."""

    display_name: str
    endpoint: str
    model: str
    api_key_env: str


class ProviderConfig(BaseModel):
    """Fully resolved provider, credential included. Never mutated."""

    model_config = ConfigDict(frozen=True)

    name: str
    api_key: SecretStr
    endpoint: str
    model_identifier: str
    display_name: str

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        value = value.rstrip("/")
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL: {value}")
        if not value.endswith(COMPLETIONS_PATH):
            raise ValueError(f"endpoint must end with {COMPLETIONS_PATH}: {value}")
        return value

    @property
    def base_url(self) -> str:
        """Endpoint without the chat-completions path, as the SDK expects it."""
        return self.endpoint[: -len(COMPLETIONS_PATH)]


class RolesConfig(BaseModel):
    answerer: str = "moonshot"
    reviewer: str = "deepseek"


class ReviewConfig(BaseModel):
    language: str = "Chinese"


class ChatConfig(BaseModel):
    temperature: float = 0.7


class ConversationsConfig(BaseModel):
    directory: Optional[str] = None


class HistoryConfig(BaseModel):
    enabled: bool = True
    path: Optional[str] = None


class AppConfig(BaseModel):
    providers: Dict[str, ProviderSettings]
    roles: RolesConfig = Field(default_factory=RolesConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)
    chat: ChatConfig = Field(default_factory=ChatConfig)
    conversations: ConversationsConfig = Field(default_factory=ConversationsConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    def get_dot_notation(self, key: str, default: Any = None) -> Any:
        """Get value using dot notation from the config model"""
        parts = key.split(".")
        current = self
        for part in parts:
            if hasattr(current, part):
                current = getattr(current, part)
            elif isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current
