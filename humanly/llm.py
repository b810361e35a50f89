"""Module with completion providers used by the pipelines."""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, override

from cerebras.cloud.sdk import APIError, Cerebras
from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from humanly.configuration import config
from humanly.data_models import ChatMessage, SamplingParameters, SentenceScore
from humanly.errors import UpstreamError


class CompletionProvider(ABC):
    """Interface of a stateless LLM completion provider shared across requests."""

    @abstractmethod
    async def generate(
        self, text: str, instructions: str, sampling: SamplingParameters
    ) -> str:
        """
        Generate a completion for a text following instructions.

        Args:
            text (str): The user's text.
            instructions (str): System instructions for the LLM.
            sampling (SamplingParameters): Sampling parameters of the generation.

        Raises:
            UpstreamError: Raised if the provider call fails.

        Returns:
            str: Generated text. It may be empty.
        """

    @abstractmethod
    async def classify(self, sentence: str, instructions: str) -> SentenceScore:
        """
        Classify a sentence as AI- or human-written.

        Args:
            sentence (str): The sentence to be classified.
            instructions (str): System instructions for the LLM.

        Raises:
            UpstreamError: Raised if the provider call fails or its output
                cannot be parsed.

        Returns:
            SentenceScore: AI and human scores with a short reason.
        """


class ChatHistory:
    """History of a chat with an LLM convertible to OpenAI compatible format."""

    def __init__(self, system_prompt: str) -> None:
        """
        Initialise a new chat.

        Args:
            system_prompt (str): System prompt for an LLM to be used in the chat.
        """
        self._history: list[ChatMessage] = [
            ChatMessage(message=system_prompt, role="system")
        ]

    def add_message(self, message: ChatMessage) -> None:
        """
        Add a new message to chat.

        Args:
            message (ChatMessage): Message to be added.
        """
        self._history.append(message)

    def to_raw(self) -> list[dict[str, str]]:
        """
        Convert current chat history to an OpenAI-compatible format.

        Returns:
            list[dict[str, str]]: OpenAI-compatible chat history.
        """
        return [message.to_dict() for message in self._history]


class CerebrasProvider(CompletionProvider):
    """Completion provider backed by Cerebras Inference."""

    def __init__(
        self,
        api_key: str = config.cerebras_api_key,
        model: str = config.llm_model,
    ) -> None:
        """
        Create a client of Cerebras Inference.

        Args:
            api_key (str, optional): Cerebras API key.
                Defaults to the value from the configuration.
            model (str, optional): Name of the model used for every call.
                Defaults to the value from the configuration.

        Raises:
            ValueError: Raised if LLM inference provider API key is missing.
        """
        if not api_key:
            raise ValueError(
                "Cerebras API key is not set. "
                "Provide config.cerebras_api_key or set CEREBRAS_API_KEY."
            )
        self.model = model
        self._cerebras_client = Cerebras(api_key=api_key)

    def _build_json_schema_response_format(self, model: type[BaseModel]) -> dict:
        """Build a JSON schema response format for Cerebras Inference."""
        schema = model.model_json_schema()

        properties = {}
        for field_name, field_info in schema.get("properties", {}).items():
            field_type = field_info.get("type")
            if field_type is None:
                # Unions such as `float | int` are declared with `anyOf`.
                field_type = "number"
            properties[field_name] = {
                "type": field_type,
                "description": field_info.get("description", ""),
            }

        return {
            "type": "json_schema",
            "json_schema": {
                "name": model.__name__,
                "strict": True,
                "schema": {
                    "type": "object",
                    "properties": properties,
                    "required": list(properties),
                    "additionalProperties": False,
                },
            },
        }

    async def _complete(self, chat: ChatHistory, **parameters: Any) -> str:
        try:
            completion = await asyncio.to_thread(
                self._cerebras_client.chat.completions.create,
                model=self.model,
                messages=chat.to_raw(),
                **parameters,
            )
        except APIError as e:
            raise UpstreamError(f"Cerebras request failed: {e}") from e

        if not completion.choices or completion.choices[0].message is None:
            raise UpstreamError("The LLM returned no message.")
        return completion.choices[0].message.content or ""

    @override
    async def generate(
        self, text: str, instructions: str, sampling: SamplingParameters
    ) -> str:
        chat = ChatHistory(system_prompt=instructions)
        chat.add_message(ChatMessage(message=text, role="user"))
        return await self._complete(
            chat, temperature=sampling.temperature, top_p=sampling.top_p
        )

    @override
    async def classify(self, sentence: str, instructions: str) -> SentenceScore:
        chat = ChatHistory(system_prompt=instructions)
        chat.add_message(ChatMessage(message=sentence, role="user"))
        response_text = await self._complete(
            chat,
            response_format=self._build_json_schema_response_format(SentenceScore),
        )
        if not response_text:
            raise UpstreamError("The LLM returned an empty response.")

        try:
            return SentenceScore.model_validate(json.loads(response_text))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.debug(f"Unparsable classification: {response_text!r}")
            raise UpstreamError("The LLM returned an unparsable response.") from e
