"""Provider clients behind the chat capability.

Both clients expose the same two calls: ``is_available()`` for the startup
probe and ``achat(messages, config)`` for one completion. Everything the
session engine needs from a provider goes through those.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from openai import AsyncOpenAI
from ollama import AsyncClient, Client

from ..config import LLMConfig

logger = logging.getLogger(__name__)


@dataclass
class Message:
    """One provider-level chat message."""

    role: str  # "system", "user" or "assistant"
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


@dataclass
class GenerationConfig:
    """Sampling settings shared by both providers."""

    temperature: float = 0.7
    max_tokens: int = 1024
    top_p: float = 0.9
    stop: list[str] = field(default_factory=list)

    @property
    def stop_sequences(self) -> list[str] | None:
        # Providers reject an empty stop list
        return self.stop or None


@dataclass
class GenerationResult:
    """Text of one completion plus token accounting when reported."""

    content: str
    model: str
    prompt_tokens: int | None = None
    completion_tokens: int | None = None


def _field(obj: Any, name: str, default: Any = None) -> Any:
    # ollama returns plain dicts in older releases and typed objects in newer ones
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


class OllamaClient:
    """Completions from a local Ollama server."""

    def __init__(
        self,
        model: str = "hermes3:latest",
        base_url: str = "http://localhost:11434",
        timeout: float = 120.0,
    ):
        """Initialize the Ollama client.

        Args:
            model: Model tag, e.g. ``hermes3:8b``
            base_url: Ollama server URL
            timeout: Request timeout in seconds
        """
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._probe = Client(host=base_url, timeout=timeout)
        self._client = AsyncClient(host=base_url, timeout=timeout)

    def installed_models(self) -> list[str]:
        """Model tags the server has pulled."""
        listing = self._probe.list()
        return [
            _field(entry, "model") or _field(entry, "name", "")
            for entry in _field(listing, "models", [])
        ]

    def is_available(self) -> bool:
        """Whether the server answers and has this model (or a tag of it)."""
        try:
            names = self.installed_models()
        except Exception as e:
            logger.warning(f"Ollama server at {self.base_url} not reachable: {e}")
            return False
        family = self.model.split(":")[0]
        return any(self.model in name or family in name for name in names)

    async def achat(
        self,
        messages: list[Message],
        config: GenerationConfig | None = None,
    ) -> GenerationResult:
        """Run one chat completion.

        Args:
            messages: Full message list, system preamble first
            config: Sampling settings

        Returns:
            GenerationResult with the reply text
        """
        config = config or GenerationConfig()
        response = await self._client.chat(
            model=self.model,
            messages=[m.to_dict() for m in messages],
            options={
                "temperature": config.temperature,
                "num_predict": config.max_tokens,
                "top_p": config.top_p,
                "stop": config.stop_sequences,
            },
        )
        message = _field(response, "message", {})
        return GenerationResult(
            content=_field(message, "content") or "",
            model=_field(response, "model") or self.model,
            prompt_tokens=_field(response, "prompt_eval_count"),
            completion_tokens=_field(response, "eval_count"),
        )


class OpenAIClient:
    """Completions from the OpenAI chat completions API."""

    def __init__(
        self,
        model: str = "gpt-4.1",
        api_key: str | None = None,
        timeout: float = 120.0,
    ):
        """Initialize the OpenAI client.

        Args:
            model: Model name, e.g. ``gpt-4.1`` or ``gpt-4o-mini``
            api_key: API key; falls back to ``OPENAI_API_KEY``
            timeout: Request timeout in seconds
        """
        self.model = model
        self.timeout = timeout
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        # AsyncOpenAI refuses to construct without a key
        self._client = AsyncOpenAI(api_key=self.api_key, timeout=timeout) if self.api_key else None

    def is_available(self) -> bool:
        return self._client is not None

    async def achat(
        self,
        messages: list[Message],
        config: GenerationConfig | None = None,
    ) -> GenerationResult:
        """Run one chat completion.

        Raises:
            RuntimeError: If no API key is configured
        """
        if self._client is None:
            raise RuntimeError("OPENAI_API_KEY is not set")
        config = config or GenerationConfig()

        completion = await self._client.chat.completions.create(
            model=self.model,
            messages=[m.to_dict() for m in messages],
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            top_p=config.top_p,
            stop=config.stop_sequences,
        )
        usage = completion.usage
        return GenerationResult(
            content=completion.choices[0].message.content or "",
            model=completion.model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )


LLMClient = OllamaClient | OpenAIClient


def create_client(config: LLMConfig) -> LLMClient:
    """Build the client for the configured provider.

    Raises:
        ValueError: If the provider is unknown
    """
    if config.provider == "openai":
        return OpenAIClient(model=config.model, timeout=config.timeout)
    if config.provider == "ollama":
        return OllamaClient(model=config.model, base_url=config.base_url, timeout=config.timeout)
    raise ValueError(f"Unknown LLM provider: {config.provider}")
