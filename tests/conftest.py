"""
Shared pytest fixtures and helpers for AI vs AI tests.

Everything runs offline: the home directory is redirected to a temporary
path and chat calls go to ``FakeChatClient`` or an ``httpx.MockTransport``.
"""

import io
from typing import Dict, List, Sequence, Union

import pytest
import yaml
from rich.console import Console

from aivsai.config.config_manager import ConfigManager
from aivsai.config.models import ProviderConfig
from aivsai.providers.base import BaseChatClient, ChatMessage

# =============================================================================
# Helpers
# =============================================================================


class FakeChatClient(BaseChatClient):
    """Returns scripted replies per provider name and records every call.

    A scripted ``Exception`` is raised instead of returned.
    """

    def __init__(self, replies: Dict[str, List[Union[str, Exception]]]):
        self.replies = {name: list(items) for name, items in replies.items()}
        self.calls: List[tuple] = []
        self.closed = False

    async def complete(self, config: ProviderConfig, messages: Sequence[ChatMessage]) -> str:
        self.calls.append((config.name, list(messages)))
        reply = self.replies[config.name].pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self) -> None:
        self.closed = True


def make_provider(name: str, model: str, display_name: str) -> ProviderConfig:
    return ProviderConfig(
        name=name,
        api_key=f"sk-{name}-0000000000",
        endpoint=f"https://api.{name}.example/v1/chat/completions",
        model_identifier=model,
        display_name=display_name,
    )


def console_output(console: Console) -> str:
    return console.file.getvalue()


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Redirect the user's home directory and clear real credentials."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.delenv("MOONSHOT_API_KEY", raising=False)
    monkeypatch.delenv("DEEPSEEK_API_KEY", raising=False)
    return home_dir


@pytest.fixture
def conversations_dir(tmp_path):
    return tmp_path / "conversations"


@pytest.fixture
def config_file(home, conversations_dir):
    """Settings file with the default providers and a fixed export directory."""
    data = ConfigManager.default_config()
    data["conversations"]["directory"] = str(conversations_dir)
    data["history"]["enabled"] = False
    path = home / "settings.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture
def config_manager(config_file):
    return ConfigManager(str(config_file))


@pytest.fixture
def console():
    """Rich console writing to a string buffer."""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def answerer():
    return make_provider("moonshot", "moonshot-v1-8k", "Moonshot AI")


@pytest.fixture
def reviewer():
    return make_provider("deepseek", "deepseek-chat", "DeepSeek AI")
