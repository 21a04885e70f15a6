from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from aivsai.config.models import AppConfig, ProviderSettings
from aivsai.utils.errors import ConfigError, ConfigErrorKind, FileAccessError
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)

CREDENTIALS_FILENAME = ".ai_vs_ai_config"
PROJECT_MARKERS = ("pyproject.toml", ".git")


def find_project_root(start: Optional[Path] = None) -> Path:
    """Return the nearest ancestor of ``start`` holding a project marker.

    Falls back to ``start`` itself (the working directory by default).
    """
    start = Path(start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return start


class ConfigManager:
    """Manages configuration from YAML"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_dir = Path.home() / ".aivsai"
        self.config_dir.mkdir(exist_ok=True)

        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = self.config_dir / "config.yaml"

        if not self.config_path.exists():
            self._create_default_config()

        self._config_data = self._load_config_file()
        try:
            self.config = AppConfig(**self._config_data)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid settings in {self.config_path}",
                kind=ConfigErrorKind.INVALID_SETTINGS,
                hint=str(e),
            ) from e
        logger.debug(f"Config loaded from {self.config_path}")

    @staticmethod
    def default_config() -> Dict:
        return {
            "providers": {
                "moonshot": {
                    "display_name": "Moonshot AI",
                    "endpoint": "https://api.moonshot.cn/v1/chat/completions",
                    "model": "moonshot-v1-8k",
                    "api_key_env": "MOONSHOT_API_KEY",
                },
                "deepseek": {
                    "display_name": "DeepSeek AI",
                    "endpoint": "https://api.deepseek.com/chat/completions",
                    "model": "deepseek-chat",
                    "api_key_env": "DEEPSEEK_API_KEY",
                },
            },
            "roles": {"answerer": "moonshot", "reviewer": "deepseek"},
            "review": {"language": "Chinese"},
            "chat": {"temperature": 0.7},
            "conversations": {"directory": None},
            "history": {"enabled": True, "path": None},
        }

    def _create_default_config(self):
        """Create default configuration file"""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.default_config(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise FileAccessError(
                f"Could not create config file {self.config_path}: {e}", path=self.config_path
            ) from e
        logger.info(f"Created default config at {self.config_path}")

    def _load_config_file(self) -> Dict:
        """Load configuration from YAML file"""
        try:
            with open(self.config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Config file {self.config_path} is not valid YAML",
                kind=ConfigErrorKind.INVALID_SETTINGS,
                hint=str(e),
            ) from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {self.config_path} must contain a mapping",
                kind=ConfigErrorKind.INVALID_SETTINGS,
            )
        return data

    def get(self, key: str, default=None) -> Any:
        """Get configuration value using dot notation"""
        return self.config.get_dot_notation(key, default)

    def get_provider_settings(self, provider: str) -> ProviderSettings:
        """Get settings for a specific provider"""
        settings = self.config.providers.get(provider)
        if settings is None:
            known = ", ".join(sorted(self.config.providers)) or "none"
            raise ConfigError(
                f"Provider '{provider}' is not configured",
                kind=ConfigErrorKind.UNKNOWN_PROVIDER,
                provider=provider,
                hint=f"Configured providers: {known}",
            )
        return settings

    @property
    def answerer_name(self) -> str:
        return self.config.roles.answerer

    @property
    def reviewer_name(self) -> str:
        return self.config.roles.reviewer

    @property
    def credentials_path(self) -> Path:
        return Path.home() / CREDENTIALS_FILENAME

    @property
    def history_path(self) -> Optional[Path]:
        if not self.config.history.enabled:
            return None
        if self.config.history.path:
            return Path(self.config.history.path).expanduser()
        return self.config_dir / "history"

    def conversations_dir(self, start: Optional[Path] = None) -> Path:
        """Directory for exported conversations."""
        if self.config.conversations.directory:
            return Path(self.config.conversations.directory).expanduser()
        return find_project_root(start) / "conversations"
