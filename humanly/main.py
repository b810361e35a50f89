"""Entry point to the application as a Typer CLI."""

import asyncio
import sys
from typing import Annotated

import typer
from loguru import logger
from typer import Typer

from humanly.configuration import config
from humanly.errors import HumanlyError

app = Typer(no_args_is_help=True)


@app.callback()
def configure_logging() -> None:
    """Humanize texts and detect AI-written ones."""
    logger.remove()
    logger.add(sys.stderr, level=config.log_level)


@app.command("api")
def run_api() -> None:
    """Start up the backend sharing the Web API."""
    import uvicorn

    from humanly.api.app import create_app

    uvicorn.run(create_app(), host=config.api_host, port=config.api_port)


@app.command("humanize")
def humanize_text(
    text: Annotated[str, typer.Argument(help="Text to be humanized.")],
) -> None:
    """Humanize a text once and print the result as JSON."""
    from humanly.humanization.rewriter import Humanizer
    from humanly.llm import CerebrasProvider

    humanizer = Humanizer(provider=CerebrasProvider())
    try:
        result = asyncio.run(humanizer.humanize(text))
    except HumanlyError as e:
        logger.error(e.message)
        raise typer.Exit(code=1) from e
    typer.echo(result.model_dump_json(indent=2))


@app.command("detect")
def detect_text(
    text: Annotated[str, typer.Argument(help="Text to be evaluated.")],
    trusted_human: Annotated[
        bool, typer.Option(help="Skip the analysis and report the text as human.")
    ] = False,
) -> None:
    """Detect AI-written sentences in a text and print the result as JSON."""
    from humanly.detection.llm_based import LLMDetector
    from humanly.llm import CerebrasProvider

    detector = LLMDetector(provider=CerebrasProvider())
    try:
        result = asyncio.run(detector.detect(text, trusted_human=trusted_human))
    except HumanlyError as e:
        logger.error(e.message)
        raise typer.Exit(code=1) from e
    typer.echo(result.model_dump_json(indent=2))


if __name__ == "__main__":
    app()
