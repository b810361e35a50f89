"""Module with project-wide data models."""

from enum import Enum
from typing import Literal, Self

from pydantic import BaseModel, Field, model_validator

ChatRole = Literal["user", "system"]
Number = float | int


class Highlight(str, Enum):
    """How strongly a sentence should be highlighted as AI-written."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Verdict(str, Enum):
    """Human-readable label of a document-level AI probability."""

    LIKELY_AI = "Likely AI-generated"
    POSSIBLY_AI = "Possibly AI-generated"
    LIKELY_HUMAN = "Likely Human-written"
    VERIFIED_HUMAN = "Human-written (Verified)"


class SamplingParameters(BaseModel):
    """Sampling parameters passed to the completion provider."""

    temperature: float = Field(..., ge=0.0)
    top_p: float = Field(..., gt=0.0, le=1.0)


class ChatMessage(BaseModel):
    """Chat message exchanged between a user and an LLM."""

    message: str
    role: ChatRole

    def to_dict(self) -> dict[str, str]:
        """
        Convert a message to a dictionary.

        Returns:
            dict[str, str]: Message as a dictionary.
        """
        return {"content": self.message, "role": self.role}


class SentenceScore(BaseModel):
    """Classification of a single sentence returned by the completion provider."""

    ai: Number
    human: Number
    reason: str = ""

    @model_validator(mode="after")
    def normalise_scores(self) -> Self:
        """Clamp scores to [0, 100] and make them sum up to 100."""
        self.ai = min(100, max(0, self.ai))
        self.human = min(100, max(0, self.human))
        if self.ai + self.human != 100:  # noqa: PLR2004
            self.human = 100 - self.ai
        return self


class SentenceJudgment(BaseModel):
    """Judgment of one sentence as reported to the client."""

    sentence: str
    ai: Number
    human: Number
    reason: str
    highlight: Highlight


class OverallScore(BaseModel):
    """Document-level AI probability with its verdict."""

    ai_probability: int = Field(..., ge=0, le=100)
    human_probability: int = Field(..., ge=0, le=100)
    verdict: Verdict

    @model_validator(mode="after")
    def validate_probabilities_sum(self) -> Self:
        """Validate whether probabilities sum up to 100."""
        if self.ai_probability + self.human_probability != 100:  # noqa: PLR2004
            raise ValueError(
                "AI and human probabilities have to sum up to 100 but they sum up "
                f"to {self.ai_probability + self.human_probability}."
            )
        return self


class DetectResult(BaseModel):
    """Outcome of the detect pipeline."""

    words_used: int
    words_left: int
    overall: OverallScore
    sentences: list[SentenceJudgment]


class HumanizeResult(BaseModel):
    """Outcome of the humanize pipeline."""

    humanized_text: str
    words_used: int
    words_left: int
    trusted_human: bool = True
