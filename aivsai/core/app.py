from typing import Optional, Tuple

from rich.console import Console

from aivsai.config.config_manager import ConfigManager
from aivsai.config.credentials import CredentialResolver
from aivsai.config.models import ProviderConfig
from aivsai.core.orchestrator import TurnOrchestrator
from aivsai.providers.base import BaseChatClient
from aivsai.providers.openai_compatible import OpenAICompatibleClient
from aivsai.session.exporter import SessionExporter
from aivsai.utils.logging import get_logger

logger = get_logger(__name__)


class AiVsAiApp:
    """
    Main application class that wires configuration, client and exporter.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        console: Optional[Console] = None,
        client: Optional[BaseChatClient] = None,
    ):
        self.console = console or Console()
        self.config_manager = ConfigManager(config_path) if config_path else ConfigManager()
        self.resolver = CredentialResolver(self.config_manager, console=self.console)
        self.client = client or OpenAICompatibleClient(
            temperature=self.config_manager.config.chat.temperature
        )
        self.exporter = SessionExporter(self.config_manager.conversations_dir())
        logger.debug("AiVsAiApp initialized")

    def resolve_providers(self) -> Tuple[ProviderConfig, ProviderConfig]:
        """Resolve the answerer, then the reviewer. Raises ConfigError."""
        answerer = self.resolver.resolve(self.config_manager.answerer_name)
        reviewer = self.resolver.resolve(self.config_manager.reviewer_name)
        return answerer, reviewer

    def create_orchestrator(self) -> TurnOrchestrator:
        answerer, reviewer = self.resolve_providers()
        return TurnOrchestrator(
            client=self.client,
            answerer=answerer,
            reviewer=reviewer,
            exporter=self.exporter,
            review_language=self.config_manager.get("review.language", "Chinese"),
            console=self.console,
        )
