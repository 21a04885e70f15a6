"""Settings and credential resolution for AI vs AI."""

from aivsai.config.config_manager import ConfigManager
from aivsai.config.credentials import CredentialResolver
from aivsai.config.models import AppConfig, ProviderConfig

__all__ = ["AppConfig", "ConfigManager", "CredentialResolver", "ProviderConfig"]
