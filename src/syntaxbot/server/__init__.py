"""Worker-based server architecture."""

from syntaxbot.server.base import Worker
from syntaxbot.server.messagebus_worker import MessageBusWorker
from syntaxbot.server.server import Server

__all__ = ["Worker", "MessageBusWorker", "Server"]
