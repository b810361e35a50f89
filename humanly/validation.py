"""Module validating texts sent to the pipelines."""

from pydantic import BaseModel

from humanly.errors import ValidationError


class ValidatedText(BaseModel):
    """A trimmed text that fits into the word limit."""

    text: str
    words_used: int
    words_left: int


def count_words(text: str) -> int:
    """
    Count whitespace-delimited words in a text.

    Args:
        text (str): The text.

    Returns:
        int: Number of words.
    """
    return len(text.split())


def validate_text(text: str | None, max_words: int) -> ValidatedText:
    """
    Trim a text and check it against a word limit.

    Args:
        text (str | None): Raw text from the request.
        max_words (int): The maximum number of words accepted.

    Raises:
        ValidationError: Raised if the text is missing, blank, or longer than
            `max_words` words.

    Returns:
        ValidatedText: The trimmed text with its word counts.
    """
    if text is None or not text.strip():
        raise ValidationError("text required")

    trimmed = text.strip()
    words_used = count_words(trimmed)
    if words_used > max_words:
        raise ValidationError("word limit exceeded", limit=max_words)

    return ValidatedText(
        text=trimmed, words_used=words_used, words_left=max_words - words_used
    )
