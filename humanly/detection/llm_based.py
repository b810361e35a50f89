"""Module with LLM-based detection of LLM-written text. Ironic..."""

import asyncio
from datetime import timedelta
from typing import override

from loguru import logger

from humanly.configuration import (
    AggregationPolicy,
    AggregationStrategy,
    config,
)
from humanly.data_models import DetectResult, Highlight, SentenceJudgment
from humanly.detection.aggregation import aggregate, highlight_of, trusted_overall
from humanly.detection.detector import Detector
from humanly.errors import UpstreamError
from humanly.llm import CompletionProvider
from humanly.nlp.sentence_splitter import RegexSentenceSplitter, SentenceSplitter
from humanly.prompts import build_classification_instructions
from humanly.validation import validate_text


class SentenceClassifier:
    """Classifies single sentences with a completion provider."""

    def __init__(
        self,
        provider: CompletionProvider,
        timeout: timedelta = config.provider_timeout,
        policy: AggregationPolicy = config.aggregation,
    ) -> None:
        """
        Set up the provider and the fallback used when it fails.

        Args:
            provider (CompletionProvider): Provider performing classification.
            timeout (timedelta, optional): Time limit of a single provider call.
                Defaults to the value from the configuration.
            policy (AggregationPolicy, optional): Source of highlight thresholds
                and of the fallback judgment. Defaults to the value from
                the configuration.
        """
        self._provider = provider
        self._timeout = timeout
        self._policy = policy

    def fallback(self, sentence: str) -> SentenceJudgment:
        """
        Get the judgment reported when a sentence cannot be classified.

        Args:
            sentence (str): The sentence.

        Returns:
            SentenceJudgment: A fixed, AI-leaning judgment.
        """
        ai = self._policy.fallback_ai
        return SentenceJudgment(
            sentence=sentence,
            ai=ai,
            human=100 - ai,
            reason=self._policy.fallback_reason,
            highlight=highlight_of(ai, self._policy),
        )

    async def classify(self, sentence: str) -> SentenceJudgment:
        """
        Classify a sentence never failing because of the provider.

        Args:
            sentence (str): The sentence.

        Returns:
            SentenceJudgment: Judgment of the provider or the fallback judgment.
        """
        try:
            score = await asyncio.wait_for(
                self._provider.classify(
                    sentence, build_classification_instructions(sentence)
                ),
                timeout=self._timeout.total_seconds(),
            )
        except TimeoutError:
            logger.warning(
                f"Classification timed out after {self._timeout}, "
                "using the fallback judgment."
            )
            return self.fallback(sentence)
        except UpstreamError as e:
            logger.warning(f"Classification failed ({e}), using the fallback judgment.")
            return self.fallback(sentence)

        return SentenceJudgment(
            sentence=sentence,
            ai=score.ai,
            human=score.human,
            reason=score.reason,
            highlight=highlight_of(score.ai, self._policy),
        )


class LLMDetector(Detector):
    """Detector asking an LLM about every sentence and aggregating the answers."""

    def __init__(  # noqa: PLR0913
        self,
        provider: CompletionProvider,
        sentence_splitter: SentenceSplitter | None = None,
        max_words: int = config.detect_max_words,
        max_concurrency: int = config.max_concurrent_classifications,
        timeout: timedelta = config.provider_timeout,
        policy: AggregationPolicy = config.aggregation,
        strategy: AggregationStrategy = config.aggregation_strategy,
    ) -> None:
        """
        Initialise the detector with its collaborators.

        Args:
            provider (CompletionProvider): Provider classifying sentences.
            sentence_splitter (SentenceSplitter | None, optional): Splitter of
                texts into sentences. Defaults to `RegexSentenceSplitter`.
            max_words (int, optional): Word limit of a text.
                Defaults to the value from the configuration.
            max_concurrency (int, optional): The maximum number of provider calls
                in flight for one text. Defaults to the value from the configuration.
            timeout (timedelta, optional): Time limit of a single provider call.
                Defaults to the value from the configuration.
            policy (AggregationPolicy, optional): Aggregation thresholds.
                Defaults to the value from the configuration.
            strategy (AggregationStrategy, optional): Aggregation strategy.
                Defaults to the value from the configuration.

        Raises:
            ValueError: Raised if `max_concurrency` is lower than 1.
        """
        if max_concurrency < 1:
            raise ValueError("`max_concurrency` must be >= 1.")

        self._classifier = SentenceClassifier(
            provider=provider, timeout=timeout, policy=policy
        )
        self._sentence_splitter = sentence_splitter or RegexSentenceSplitter()
        self._max_words = max_words
        self._max_concurrency = max_concurrency
        self._policy = policy
        self._strategy = strategy

    async def _classify_all(self, sentences: list[str]) -> list[SentenceJudgment]:
        # Bounds calls made for this text only.
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def classify_bounded(sentence: str) -> SentenceJudgment:
            async with semaphore:
                return await self._classifier.classify(sentence)

        # `gather()` returns results in the order of the awaitables.
        return list(
            await asyncio.gather(*(classify_bounded(s) for s in sentences))
        )

    def _trusted_judgments(self, sentences: list[str]) -> list[SentenceJudgment]:
        ai = self._policy.trusted_sentence_ai
        return [
            SentenceJudgment(
                sentence=sentence,
                ai=ai,
                human=100 - ai,
                reason="Verified human-written text",
                highlight=Highlight.LOW,
            )
            for sentence in sentences
        ]

    @override
    async def detect(
        self, text: str | None, *, trusted_human: bool = False
    ) -> DetectResult:
        validated = validate_text(text, max_words=self._max_words)
        sentences = self._sentence_splitter.split_into_sentences(validated.text)

        if trusted_human:
            # The flag is only the caller's word, nothing is verified here.
            logger.info(
                f"{self.get_name()} skips classification of "
                f"{len(sentences)} sentence(s) of a text marked as trusted."
            )
            return DetectResult(
                words_used=validated.words_used,
                words_left=validated.words_left,
                overall=trusted_overall(self._policy),
                sentences=self._trusted_judgments(sentences),
            )

        judgments = await self._classify_all(sentences)
        overall = aggregate(judgments, policy=self._policy, strategy=self._strategy)
        logger.info(
            f"{self.get_name()} classified {len(judgments)} sentence(s): "
            f"{overall.ai_probability}% AI, {overall.verdict.value}."
        )
        return DetectResult(
            words_used=validated.words_used,
            words_left=validated.words_left,
            overall=overall,
            sentences=judgments,
        )
