"""Module assembling the FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from humanly.api.data_models import HealthcheckResponse
from humanly.api.router import lifespan
from humanly.api.router import router as main_router
from humanly.api.utils import register_exception_handlers
from humanly.configuration import config
from humanly.humanization.noise import RandomSource
from humanly.llm import CompletionProvider

description = """
**Humanly** rewrites texts to sound human and estimates how likely a text
was written by AI.

## Endpoints

- `POST /humanize` rewrites up to 200 words casually.
- `POST /detect` scores up to 800 words sentence by sentence.

Passing `trusted_human: true` to `/detect` skips the analysis. The flag is
not verified in any way.
"""


def create_app(
    provider: CompletionProvider | None = None, rng: RandomSource | None = None
) -> FastAPI:
    """
    Create the application.

    Args:
        provider (CompletionProvider | None, optional): Completion provider shared
            by the pipelines. Defaults to Cerebras created on startup.
        rng (RandomSource | None, optional): Source of randomness of the humanizer.
            Defaults to an unseeded `random.Random`.

    Returns:
        FastAPI: The application.
    """
    fastapi_app = FastAPI(
        title=config.project_name,
        summary="Humanly humanizes texts and detects AI-written ones.",
        description=description,
        lifespan=lifespan,
    )
    fastapi_app.state.provider = provider
    fastapi_app.state.rng = rng

    register_exception_handlers(fastapi_app)
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.get("/")
    async def root() -> HealthcheckResponse:
        """Report that the API is up."""
        return HealthcheckResponse(status="AI Humanizer + Detector API running")

    fastapi_app.include_router(main_router)
    return fastapi_app
