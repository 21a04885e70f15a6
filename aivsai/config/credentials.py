"""Credential lookup for the configured providers.

Keys come from the process environment, then from the per-user credential
store (``KEY=VALUE`` lines read with python-dotenv). Missing keys are asked
for once and appended to the store. Freshly entered keys are cached on the
resolver instead of being written back into ``os.environ``.
"""

import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

import click
from dotenv import dotenv_values
from pydantic import ValidationError
from rich.console import Console

from aivsai.config.config_manager import ConfigManager
from aivsai.config.models import ProviderConfig
from aivsai.utils.errors import ConfigError, ConfigErrorKind, FileAccessError
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)


def prompt_for_key(display_name: str) -> str:
    return click.prompt(
        f"Enter API Key for {display_name}",
        default="",
        show_default=False,
        hide_input=True,
    )


class CredentialResolver:
    """Resolves provider names into immutable ``ProviderConfig`` values."""

    def __init__(
        self,
        config_manager: ConfigManager,
        environ: Optional[Mapping[str, str]] = None,
        prompt: Callable[[str], str] = prompt_for_key,
        console: Optional[Console] = None,
    ):
        self.config_manager = config_manager
        self.store_path: Path = config_manager.credentials_path
        self._environ = os.environ if environ is None else environ
        self._prompt = prompt
        self._console = console or Console()
        self._entered: Dict[str, str] = {}

    def _stored_values(self) -> Dict[str, str]:
        if not self.store_path.exists():
            return {}
        return {k: v for k, v in dotenv_values(self.store_path).items() if v}

    def lookup(self, env_var: str) -> Optional[str]:
        """Return a known key without prompting."""
        if env_var in self._entered:
            return self._entered[env_var]
        value = self._environ.get(env_var)
        if value:
            return value
        return self._stored_values().get(env_var)

    def _persist(self, env_var: str, value: str) -> None:
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.store_path, "a", encoding="utf-8") as f:
                f.write(f"{env_var}={value}\n")
        except OSError as e:
            raise FileAccessError(
                f"Failed to write credential store {self.store_path}: {e}",
                path=self.store_path,
            ) from e
        logger.debug(f"Appended {env_var} to {self.store_path}")

    def _obtain_key(self, provider_name: str, env_var: str, display_name: str) -> str:
        key = self.lookup(env_var)
        if key:
            return key

        entered = self._prompt(display_name).strip()
        if not entered:
            raise ConfigError(
                f"API Key for {display_name} cannot be empty",
                kind=ConfigErrorKind.MISSING_CREDENTIAL,
                provider=provider_name,
                hint=f"Set {env_var} or add it to {self.store_path}",
            )

        self._persist(env_var, entered)
        self._entered[env_var] = entered
        self._console.print(f"[dim]Saved {env_var} to {self.store_path}[/dim]")
        return entered

    def resolve(self, provider_name: str) -> ProviderConfig:
        """Build the config for ``provider_name``, prompting for a key if needed.

        Raises:
            ConfigError: unknown provider, empty key or invalid endpoint.
            FileAccessError: the credential store could not be written.
        """
        settings = self.config_manager.get_provider_settings(provider_name)
        api_key = self._obtain_key(provider_name, settings.api_key_env, settings.display_name)
        try:
            config = ProviderConfig(
                name=provider_name,
                api_key=api_key,
                endpoint=settings.endpoint,
                model_identifier=settings.model,
                display_name=settings.display_name,
            )
        except ValidationError as e:
            raise ConfigError(
                f"Invalid settings for provider '{provider_name}'",
                kind=ConfigErrorKind.INVALID_SETTINGS,
                provider=provider_name,
                hint=str(e),
            ) from e
        logger.debug(f"Resolved provider {provider_name} ({config.model_identifier})")
        return config
