"""Package with data models for the API."""

from pydantic import BaseModel

from humanly.data_models import OverallScore, SentenceJudgment


class HealthcheckResponse(BaseModel):
    """Response from the healthcheck endpoint indicating the status of the system."""

    status: str


class ErrorResponse(BaseModel):
    """Body of every unsuccessful response."""

    error: str
    limit: int | None = None


class HumanizeRequest(BaseModel):
    """API request for humanizing a text."""

    # Optional so that a missing text is reported like a blank one.
    text: str | None = None


class HumanizeResponse(BaseModel):
    """Response with a humanized text."""

    success: bool = True
    humanized_text: str
    words_used: int
    words_left: int
    trusted_human: bool


class DetectRequest(BaseModel):
    """API request for a text origin evaluation."""

    text: str | None = None
    trusted_human: bool = False


class DetectResponse(BaseModel):
    """Response sent when a client requests detection in a text."""

    success: bool = True
    words_used: int
    words_left: int
    overall: OverallScore
    sentences: list[SentenceJudgment]
