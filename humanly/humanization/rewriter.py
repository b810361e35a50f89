"""Module with the humanize pipeline."""

import asyncio
import random
from datetime import timedelta

from loguru import logger

from humanly.configuration import config
from humanly.data_models import HumanizeResult, SamplingParameters
from humanly.errors import GenerationError, UpstreamError
from humanly.humanization.noise import RandomSource, inject_human_noise
from humanly.llm import CompletionProvider
from humanly.prompts import HUMANIZE_INSTRUCTIONS
from humanly.validation import validate_text


class Humanizer:
    """Rewrites text casually with an LLM and roughens the result."""

    def __init__(
        self,
        provider: CompletionProvider,
        rng: RandomSource | None = None,
        max_words: int = config.humanize_max_words,
        timeout: timedelta = config.provider_timeout,
        sampling: SamplingParameters | None = None,
    ) -> None:
        """
        Initialise the humanizer with its collaborators.

        Args:
            provider (CompletionProvider): Provider rewriting the text.
            rng (RandomSource | None, optional): Source of randomness for noise
                injection. Defaults to an unseeded `random.Random`.
            max_words (int, optional): Word limit of a text.
                Defaults to the value from the configuration.
            timeout (timedelta, optional): Time limit of the provider call.
                Defaults to the value from the configuration.
            sampling (SamplingParameters | None, optional): Sampling of the
                rewrite, high temperature for variability. Defaults to the values
                from the configuration.
        """
        self._provider = provider
        self._rng = rng or random.Random()  # noqa: S311, not used for security.
        self._max_words = max_words
        self._timeout = timeout
        self._sampling = sampling or SamplingParameters(
            temperature=config.humanize_temperature, top_p=config.humanize_top_p
        )

    async def rewrite(self, text: str) -> str:
        """
        Rewrite a text once with the provider without any post-processing.

        Args:
            text (str): Validated text.

        Raises:
            UpstreamError: Raised if the provider call fails or times out.
            GenerationError: Raised if the provider returns no text.

        Returns:
            str: The rewritten text.
        """
        try:
            output = await asyncio.wait_for(
                self._provider.generate(
                    text, instructions=HUMANIZE_INSTRUCTIONS, sampling=self._sampling
                ),
                timeout=self._timeout.total_seconds(),
            )
        except TimeoutError as e:
            raise UpstreamError(f"Generation timed out after {self._timeout}.") from e

        if not output or not output.strip():
            raise GenerationError("No output generated.")
        return output.strip()

    async def humanize(self, text: str | None) -> HumanizeResult:
        """
        Run the humanize pipeline on a text from the client.

        Args:
            text (str | None): Text as sent by the client.

        Raises:
            ValidationError: Raised if the text is missing, blank, or too long.
            UpstreamError: Raised if the provider fails or returns no text.

        Returns:
            HumanizeResult: The humanized text with word counts of the input.
        """
        validated = validate_text(text, max_words=self._max_words)
        rewritten = await self.rewrite(validated.text)
        humanized = inject_human_noise(rewritten, self._rng)
        logger.info(
            f"Humanized {validated.words_used} word(s) into "
            f"{len(humanized.split())} word(s)."
        )
        return HumanizeResult(
            humanized_text=humanized,
            words_used=validated.words_used,
            words_left=validated.words_left,
        )
