"""LLM integration module for clients, chat capability and orchestration."""

from .chat import Chat, ChatAgent, LogProgress, Progress
from .client import OllamaClient, OpenAIClient, create_client
from .orchestrator import ChatOrchestrator

__all__ = [
    "Chat", "ChatAgent", "LogProgress", "Progress",
    "OllamaClient", "OpenAIClient", "create_client",
    "ChatOrchestrator",
]
