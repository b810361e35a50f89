"""Module for splitting a text into sentences."""

import re
from abc import ABC, abstractmethod
from typing import override

from humanly.configuration import config


class SentenceSplitter(ABC):
    """Interface for splitting a text into sentences."""

    @abstractmethod
    def split_into_sentences(self, text: str) -> list[str]:
        """
        Split a text into sentences.

        Args:
            text (str): Text to be split.

        Returns:
            list[str]: List of sentences, one items is one sentence.
        """


class RegexSentenceSplitter(SentenceSplitter):
    """Splits after terminal punctuation and drops fragments too short to judge."""

    _boundary = re.compile(r"(?<=[.!?])\s+")

    def __init__(self, min_length: int = config.min_sentence_length) -> None:
        """
        Set the minimum length of a kept sentence.

        Args:
            min_length (int, optional): Sentences with fewer characters are
                discarded. Defaults to the value from the configuration.
        """
        self._min_length = min_length

    @override
    def split_into_sentences(self, text: str) -> list[str]:
        sentences = (segment.strip() for segment in self._boundary.split(text))
        return [
            sentence for sentence in sentences if len(sentence) >= self._min_length
        ]
