"""Tests for LLM clients and the chat agent."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from storyloop.config import LLMConfig
from storyloop.game.session_state import ASSISTANT, USER, Turn
from storyloop.llm.chat import ChatAgent
from storyloop.llm.client import (
    GenerationConfig,
    GenerationResult,
    Message,
    OllamaClient,
    OpenAIClient,
    create_client,
)


class TestMessage:
    """Test Message dataclass."""

    def test_to_dict(self):
        """Test converting message to dictionary."""
        msg = Message(role="assistant", content="Hi there!")
        assert msg.to_dict() == {"role": "assistant", "content": "Hi there!"}


class TestGenerationConfig:
    """Test GenerationConfig dataclass."""

    def test_default_values(self):
        """Test default configuration values."""
        config = GenerationConfig()
        assert config.temperature == 0.7
        assert config.max_tokens == 1024
        assert config.top_p == 0.9
        assert config.stop == []


class TestOllamaClient:
    """Test OllamaClient wrapper."""

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_is_available(self, mock_client_class, mock_async_class):
        """Test checking if Ollama is available."""
        mock_client = MagicMock()
        mock_client.list.return_value = {
            "models": [{"name": "hermes3:latest"}, {"name": "llama2:7b"}]
        }
        mock_client_class.return_value = mock_client

        client = OllamaClient(model="hermes3:latest")
        assert client.is_available() is True

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_is_not_available(self, mock_client_class, mock_async_class):
        """Test when Ollama model is not available."""
        mock_client = MagicMock()
        mock_client.list.return_value = {"models": [{"name": "llama2:7b"}]}
        mock_client_class.return_value = mock_client

        client = OllamaClient(model="hermes3:latest")
        assert client.is_available() is False

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_typed_listing(self, mock_client_class, mock_async_class):
        """Newer ollama releases return objects instead of dicts."""
        listing = SimpleNamespace(models=[SimpleNamespace(model="hermes3:8b")])
        mock_client_class.return_value.list.return_value = listing

        client = OllamaClient(model="hermes3:latest")
        assert client.installed_models() == ["hermes3:8b"]
        assert client.is_available() is True

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_server_down(self, mock_client_class, mock_async_class):
        """An unreachable server is reported as unavailable."""
        mock_client = MagicMock()
        mock_client.list.side_effect = ConnectionError("refused")
        mock_client_class.return_value = mock_client

        assert OllamaClient().is_available() is False

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_achat(self, mock_client_class, mock_async_class):
        """Test async chat with message history."""
        mock_async = MagicMock()
        mock_async.chat = AsyncMock(
            return_value={
                "message": {"content": "Chat response"},
                "model": "hermes3:latest",
                "done": True,
                "eval_count": 12,
            }
        )
        mock_async_class.return_value = mock_async

        client = OllamaClient()
        messages = [
            Message(role="system", content="You are a DM"),
            Message(role="user", content="Hello"),
        ]
        result = asyncio.run(client.achat(messages, GenerationConfig(max_tokens=256)))

        assert isinstance(result, GenerationResult)
        assert result.content == "Chat response"
        assert result.completion_tokens == 12
        kwargs = mock_async.chat.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "You are a DM"}
        assert kwargs["options"]["num_predict"] == 256


class TestOpenAIClient:
    """Test OpenAIClient wrapper."""

    def test_unavailable_without_key(self, monkeypatch):
        """No key means the client is unavailable and refuses to chat."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        client = OpenAIClient()
        assert client.is_available() is False
        with pytest.raises(RuntimeError):
            asyncio.run(client.achat([Message(role="user", content="Hi")]))

    @patch("storyloop.llm.client.AsyncOpenAI")
    def test_achat(self, mock_openai_class):
        """Completions are unwrapped into a GenerationResult."""
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="The tavern is warm."))],
            model="gpt-4.1",
            usage=SimpleNamespace(prompt_tokens=40, completion_tokens=8),
        )
        mock_openai = MagicMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=completion)
        mock_openai_class.return_value = mock_openai

        client = OpenAIClient(api_key="sk-test")
        result = asyncio.run(client.achat([Message(role="user", content="Hi")]))

        assert client.is_available()
        assert result.content == "The tavern is warm."
        assert result.prompt_tokens == 40
        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4.1"
        assert kwargs["stop"] is None


class TestCreateClient:
    """Test provider selection."""

    @patch("storyloop.llm.client.AsyncClient")
    @patch("storyloop.llm.client.Client")
    def test_ollama(self, mock_client_class, mock_async_class):
        """Ollama settings are passed through."""
        client = create_client(LLMConfig(provider="ollama", model="hermes3:8b"))
        assert isinstance(client, OllamaClient)
        assert client.model == "hermes3:8b"

    def test_openai(self):
        """OpenAI is the default provider."""
        assert isinstance(create_client(LLMConfig()), OpenAIClient)

    def test_unknown(self):
        """Unknown providers are rejected."""
        with pytest.raises(ValueError):
            create_client(LLMConfig(provider="carrier-pigeon"))


class TestChatAgent:
    """Test ChatAgent message assembly."""

    def test_build_messages(self):
        """Preamble, then history, then the new prompt."""
        agent = ChatAgent(MagicMock(), "You are the DM.")
        history = [Turn(USER, "Hello"), Turn(ASSISTANT, "Welcome")]
        messages = agent.build_messages("I enter.", history)

        assert [m.role for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[0].content == "You are the DM."
        assert messages[-1].content == "I enter."

    def test_exchange(self):
        """exchange returns the client's text with the agent's settings."""
        client = MagicMock()
        client.achat = AsyncMock(return_value=GenerationResult(content="Welcome back.", model="m"))
        config = GenerationConfig(temperature=0.2)
        agent = ChatAgent(client, "You are the DM.", config)

        assert asyncio.run(agent.exchange("Hi", [])) == "Welcome back."
        assert client.achat.call_args.kwargs["config"] is config
        assert len(client.achat.call_args.args[0]) == 2
