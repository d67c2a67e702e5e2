import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from config.config import ModelConfig, resolve_provider
from swarm.errors import AgentInvocationFailure
from swarm.gateway import CompletionGateway
from swarm.llm_clients import AnthropicClient, BaseLLMClient, GoogleClient, OpenAIClient, XAIClient
from swarm.models.schemas import ConversationMessage, ReasoningEffort


def client_config(name="Test"):
    return ModelConfig(name=name, api_key="test-key", model_id="test-model", max_tokens=512, temperature=1)


class EchoClient(BaseLLMClient):
    provider = "openai"

    def __init__(self):
        super().__init__(client_config())
        self.requests = []

    async def generate(self, messages, model=None, reasoning_effort=None, max_tokens=None):
        self.requests.append((messages, model, reasoning_effort))
        return f"echo: {messages[-1].text}"


def chat_completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class ResolveProviderTests(unittest.TestCase):
    def test_prefixes(self):
        self.assertEqual(resolve_provider("gpt-5.1"), "openai")
        self.assertEqual(resolve_provider("o3-mini"), "openai")
        self.assertEqual(resolve_provider("claude-sonnet-4-5"), "anthropic")
        self.assertEqual(resolve_provider("gemini-3-pro-preview"), "google")
        self.assertEqual(resolve_provider("grok-3-mini"), "xai")

    def test_explicit_provider(self):
        self.assertEqual(resolve_provider("anthropic/some-model"), "anthropic")
        self.assertEqual(resolve_provider("openrouter/claude-3"), "anthropic")


class CompletionGatewayTests(unittest.IsolatedAsyncioTestCase):
    async def test_invoke_routes_to_provider_client(self):
        client = EchoClient()
        gateway = CompletionGateway({"openai": client})

        result = await gateway.invoke(
            "gpt-test",
            [ConversationMessage.system("sys"), ConversationMessage.user("hello")],
            ReasoningEffort.LOW
        )

        self.assertEqual(result.text, "echo: hello")
        self.assertEqual(result.provider, "openai")
        self.assertEqual(result.model, "gpt-test")
        self.assertEqual(client.requests[0][1:], ("gpt-test", ReasoningEffort.LOW))

    async def test_provider_prefix_is_stripped(self):
        client = EchoClient()
        gateway = CompletionGateway({"openai": client})

        await gateway.invoke("openai/gpt-4o", [ConversationMessage.user("hi")])

        self.assertEqual(client.requests[0][1], "gpt-4o")

    async def test_missing_provider_raises(self):
        gateway = CompletionGateway({"openai": EchoClient()})
        with self.assertRaises(AgentInvocationFailure):
            await gateway.invoke("claude-test", [ConversationMessage.user("hi")])

    def test_providers(self):
        self.assertEqual(CompletionGateway({"openai": EchoClient()}).providers, ["openai"])


class OpenAIClientTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = OpenAIClient(client_config("OpenAI"))
        self.client.client = MagicMock()
        self.create = AsyncMock(return_value=chat_completion("Hi there"))
        self.client.client.chat.completions.create = self.create

    def test_missing_key_is_rejected(self):
        with self.assertRaises(ValueError):
            OpenAIClient(ModelConfig(name="OpenAI", api_key=None, model_id="gpt"))

    def test_file_parts_become_file_inputs(self):
        converted = self.client._convert_messages([
            ConversationMessage.system("sys"),
            ConversationMessage.user("read this", files=["file-1"])
        ])

        self.assertEqual(converted[0], {"role": "system", "content": "sys"})
        self.assertEqual(converted[1]["content"], [
            {"type": "text", "text": "read this"},
            {"type": "file", "file": {"file_id": "file-1"}}
        ])

    async def test_generate_passes_reasoning_effort(self):
        text = await self.client.generate(
            [ConversationMessage.user("hello")],
            model="gpt-x",
            reasoning_effort=ReasoningEffort.MEDIUM
        )

        self.assertEqual(text, "Hi there")
        kwargs = self.create.call_args.kwargs
        self.assertEqual(kwargs["model"], "gpt-x")
        self.assertEqual(kwargs["reasoning_effort"], "medium")
        self.assertEqual(kwargs["max_completion_tokens"], 512)

    async def test_generate_without_effort(self):
        await self.client.generate([ConversationMessage.user("hello")])
        self.assertNotIn("reasoning_effort", self.create.call_args.kwargs)

    async def test_empty_choices(self):
        self.create.return_value = SimpleNamespace(choices=[])
        self.assertEqual(await self.client.generate([ConversationMessage.user("hello")]), "")


class XAIClientTests(unittest.IsolatedAsyncioTestCase):
    async def test_uses_max_tokens(self):
        client = XAIClient(client_config("Grok"))
        client.client = MagicMock()
        client.client.chat.completions.create = AsyncMock(return_value=chat_completion("ok"))

        await client.generate([ConversationMessage.user("hello")])

        kwargs = client.client.chat.completions.create.call_args.kwargs
        self.assertIn("max_tokens", kwargs)
        self.assertNotIn("max_completion_tokens", kwargs)
        self.assertEqual(client.provider, "xai")


class AnthropicClientTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = AnthropicClient(client_config("Anthropic"))
        self.client.client = MagicMock()
        self.create = AsyncMock(return_value=SimpleNamespace(content=[
            SimpleNamespace(type="thinking", thinking="hmm"),
            SimpleNamespace(type="text", text="Hello "),
            SimpleNamespace(type="text", text="world")
        ]))
        self.client.client.messages.create = self.create

    async def test_system_prompt_and_text_blocks(self):
        text = await self.client.generate([
            ConversationMessage.system("be brief"),
            ConversationMessage.user("hi", files=["file-9"])
        ])

        self.assertEqual(text, "Hello world")
        kwargs = self.create.call_args.kwargs
        self.assertEqual(kwargs["system"], "be brief")
        self.assertEqual(kwargs["messages"][0]["role"], "user")
        self.assertIn("file-9", kwargs["messages"][0]["content"])
        self.assertNotIn("thinking", kwargs)

    async def test_reasoning_effort_enables_thinking(self):
        await self.client.generate([ConversationMessage.user("hi")], reasoning_effort=ReasoningEffort.MEDIUM)

        kwargs = self.create.call_args.kwargs
        self.assertEqual(kwargs["thinking"], {"type": "enabled", "budget_tokens": 4096})
        self.assertGreater(kwargs["max_tokens"], 4096)
        self.assertNotIn("temperature", kwargs)


class GoogleClientTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.client = GoogleClient(client_config("Gemini"))
        self.client.client = MagicMock()
        self.generate_content = AsyncMock(return_value=SimpleNamespace(text="Gemini says hi"))
        self.client.client.aio.models.generate_content = self.generate_content

    async def test_generate(self):
        text = await self.client.generate(
            [ConversationMessage.system("sys"), ConversationMessage.user("hi")],
            reasoning_effort=ReasoningEffort.HIGH
        )

        self.assertEqual(text, "Gemini says hi")
        kwargs = self.generate_content.call_args.kwargs
        self.assertEqual(kwargs["contents"], "hi")
        self.assertEqual(kwargs["config"].system_instruction, "sys")
        self.assertEqual(kwargs["config"].thinking_config.thinking_budget, 8192)

    async def test_low_effort_budget(self):
        await self.client.generate([ConversationMessage.user("hi")])
        kwargs = self.generate_content.call_args.kwargs
        self.assertEqual(kwargs["config"].thinking_config.thinking_budget, 1024)

    async def test_empty_text(self):
        self.generate_content.return_value = SimpleNamespace(text=None)
        self.assertEqual(await self.client.generate([ConversationMessage.user("hi")]), "")


if __name__ == "__main__":
    unittest.main()
