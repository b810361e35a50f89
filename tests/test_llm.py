import json
from types import SimpleNamespace

import httpx
import pytest
from cerebras.cloud.sdk import APIConnectionError
from fakes import FakeCompletions, make_provider
from pydantic import ValidationError as PydanticValidationError

from humanly.data_models import ChatMessage, SamplingParameters, SentenceScore
from humanly.errors import UpstreamError
from humanly.llm import CerebrasProvider, ChatHistory


def test_missing_api_key():
    with pytest.raises(ValueError, match="API key"):
        CerebrasProvider(api_key="")


@pytest.mark.asyncio
async def test_generate_sends_instructions_text_and_sampling():
    completions = FakeCompletions(content="Rewritten text.")
    provider = make_provider(completions)

    output = await provider.generate(
        "Original text.",
        instructions="Rewrite it.",
        sampling=SamplingParameters(temperature=1.15, top_p=0.85),
    )

    assert output == "Rewritten text."
    (call,) = completions.calls
    assert call["model"] == "test-model"
    assert call["messages"] == [
        {"content": "Rewrite it.", "role": "system"},
        {"content": "Original text.", "role": "user"},
    ]
    assert call["temperature"] == 1.15
    assert call["top_p"] == 0.85


@pytest.mark.asyncio
async def test_generate_with_empty_content():
    provider = make_provider(FakeCompletions(content=None))

    output = await provider.generate(
        "Text.", instructions="Rewrite it.", sampling=SamplingParameters(
            temperature=1.0, top_p=1.0
        )
    )

    assert output == ""


@pytest.mark.asyncio
async def test_classify_parses_structured_output():
    completions = FakeCompletions(
        content=json.dumps({"ai": 80, "human": 20, "reason": "Polished"})
    )
    provider = make_provider(completions)

    result = await provider.classify("A sentence.", instructions="Classify it.")

    assert result == SentenceScore(ai=80, human=20, reason="Polished")
    response_format = completions.calls[0]["response_format"]
    assert response_format["type"] == "json_schema"
    schema = response_format["json_schema"]["schema"]
    assert schema["properties"]["ai"]["type"] == "number"
    assert schema["properties"]["human"]["type"] == "number"
    assert schema["properties"]["reason"]["type"] == "string"
    assert sorted(schema["required"]) == ["ai", "human", "reason"]


@pytest.mark.asyncio
async def test_classify_normalises_scores():
    provider = make_provider(
        FakeCompletions(content=json.dumps({"ai": 120, "human": 5, "reason": "x"}))
    )

    result = await provider.classify("A sentence.", instructions="Classify it.")

    assert result.ai == 100
    assert result.human == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    ["", None, "not json", json.dumps({"ai": "a lot", "human": 0, "reason": ""})],
)
async def test_classify_rejects_unparsable_output(content):
    provider = make_provider(FakeCompletions(content=content))

    with pytest.raises(UpstreamError):
        await provider.classify("A sentence.", instructions="Classify it.")


@pytest.mark.asyncio
async def test_sdk_errors_become_upstream_errors():
    error = APIConnectionError(request=httpx.Request("POST", "https://api.cerebras.ai"))
    provider = make_provider(FakeCompletions(error=error))

    with pytest.raises(UpstreamError) as exc:
        await provider.classify("A sentence.", instructions="Classify it.")

    assert exc.value.__cause__ is error


@pytest.mark.asyncio
@pytest.mark.parametrize("choices", [[], [SimpleNamespace(message=None)]])
async def test_missing_message_becomes_upstream_error(choices):
    provider = make_provider(FakeCompletions(choices=choices))

    with pytest.raises(UpstreamError, match="no message"):
        await provider.classify("A sentence.", instructions="Classify it.")
    with pytest.raises(UpstreamError, match="no message"):
        await provider.generate(
            "Text.",
            instructions="Rewrite it.",
            sampling=SamplingParameters(temperature=1.0, top_p=1.0),
        )


def test_chat_history_sends_system_prompt_first():
    chat = ChatHistory(system_prompt="Classify it.")
    chat.add_message(ChatMessage(message="A sentence.", role="user"))

    assert chat.to_raw() == [
        {"content": "Classify it.", "role": "system"},
        {"content": "A sentence.", "role": "user"},
    ]


def test_chat_message_rejects_assistant_role():
    with pytest.raises(PydanticValidationError):
        ChatMessage(message="Earlier answer.", role="assistant")
