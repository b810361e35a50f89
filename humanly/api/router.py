"""Module with the endpoints of the API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from loguru import logger

from humanly.api.data_models import (
    DetectRequest,
    DetectResponse,
    ErrorResponse,
    HumanizeRequest,
    HumanizeResponse,
)
from humanly.detection.detector import Detector
from humanly.detection.llm_based import LLMDetector
from humanly.errors import InternalError, UpstreamError
from humanly.humanization.rewriter import Humanizer
from humanly.llm import CerebrasProvider

router = APIRouter()

_error_responses = {
    400: {"model": ErrorResponse, "description": "Missing, blank, or too long text."},
    500: {"model": ErrorResponse, "description": "The pipeline failed."},
}


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI) -> AsyncIterator[None]:
    """Create the pipelines sharing one completion provider."""
    provider = getattr(fastapi_app.state, "provider", None)
    if provider is None:
        provider = CerebrasProvider()
        fastapi_app.state.provider = provider
    logger.info(f"Using {type(provider).__name__} as the completion provider.")

    fastapi_app.state.humanizer = Humanizer(
        provider=provider, rng=getattr(fastapi_app.state, "rng", None)
    )
    fastapi_app.state.detector = LLMDetector(provider=provider)
    yield


def get_humanizer(fastapi_request: Request) -> Humanizer:
    """Get the humanizer of the application."""
    return fastapi_request.app.state.humanizer


def get_detector(fastapi_request: Request) -> Detector:
    """Get the detector of the application."""
    return fastapi_request.app.state.detector


@router.post("/humanize", responses=_error_responses)
async def humanize(
    request: HumanizeRequest, humanizer: Humanizer = Depends(get_humanizer)
) -> HumanizeResponse:
    """Rewrite a text so it reads as written casually by a person."""
    try:
        result = await humanizer.humanize(request.text)
    except UpstreamError as e:
        raise InternalError("Humanization failed") from e

    return HumanizeResponse(**result.model_dump())


@router.post("/detect", responses=_error_responses)
async def detect(
    request: DetectRequest, detector: Detector = Depends(get_detector)
) -> DetectResponse:
    """Score every sentence of a text and the text as a whole."""
    try:
        result = await detector.detect(
            request.text, trusted_human=request.trusted_human
        )
    except UpstreamError as e:
        raise InternalError("Detection failed") from e

    return DetectResponse(**result.model_dump())
