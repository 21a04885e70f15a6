from .chat import chat_command
from .conversations import conversations_command
from .info import config_command, version_command

__all__ = [
    "chat_command",
    "config_command",
    "conversations_command",
    "version_command",
]
