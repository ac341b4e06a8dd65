"""Typer admin CLI: normalize and capture product photos, caption them, write card messages."""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from floral_admin.ai.client_base import BaseFloralAIClient
from floral_admin.ai.factory import get_ai_client
from floral_admin.ai.schema import AIOutcome, AIResult
from floral_admin.capture.camera import CaptureSession
from floral_admin.capture.normalize import normalize_image_file
from floral_admin.core.config import get_config
from floral_admin.core.data_uri import EncodedImage
from floral_admin.core.errors import DeviceUnavailableError, ImageDecodeError
from floral_admin.core.io_utils import mask_secret
from floral_admin.core.logging import setup_logging

app = typer.Typer(no_args_is_help=True)

CLIENT_HELP = "AI client: gemini or mock. Defaults to ai_client from config."


@app.callback()
def main_callback(
    config_path: Path | None = typer.Option(None, "--config", help="Path to a floral_admin.yml config file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging to stdout"),
) -> None:
    """Floral shop catalog admin tools."""
    if config_path is not None:
        get_config(config_path)
    setup_logging("DEBUG" if verbose else None)


def _load_image(path: Path) -> EncodedImage:
    try:
        return normalize_image_file(path)
    except ImageDecodeError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def _write_image(image: EncodedImage, out: Path | None) -> None:
    if out is None:
        typer.echo(image.data_uri)
        return
    out.write_bytes(image.to_bytes())
    typer.secho(f"Wrote {image.width}x{image.height} JPEG to {out}", fg=typer.colors.GREEN)


def _ai_client(name: str | None) -> BaseFloralAIClient:
    try:
        return get_ai_client(name or get_config().ai_client)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def _emit(result: AIResult) -> None:
    """Print an AI result; failures go to stderr in red and exit 1."""
    if result.outcome == AIOutcome.ok:
        typer.echo(result.text)
        return
    if result.outcome == AIOutcome.empty:
        typer.secho(result.text or "(no result)", fg=typer.colors.YELLOW)
        return
    typer.secho(result.text or "", fg=typer.colors.RED, err=True)
    if result.detail:
        typer.secho(f"[{result.error.value if result.error else 'error'}] {result.detail}", err=True)
    raise typer.Exit(1)


@app.command()
def normalize(
    path: Path = typer.Argument(..., help="Image file to normalize"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write the JPEG here instead of printing the data URI"),
) -> None:
    """Resize a photo so its longer edge fits the configured bound and encode it as JPEG."""
    _write_image(_load_image(path), out)


@app.command()
def capture(
    camera_index: int | None = typer.Option(None, "--camera-index", help="OpenCV camera index. Defaults to camera_index from config."),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write the JPEG here instead of printing the data URI"),
) -> None:
    """Take one still from the camera."""
    try:
        with CaptureSession(camera_index) as session:
            image = session.capture_still()
    except DeviceUnavailableError as e:
        typer.secho(f"No se pudo acceder a la cámara: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    _write_image(image, out)


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="Product photo"),
    client: str | None = typer.Option(None, "--client", help=CLIENT_HELP),
) -> None:
    """Caption a product photo for image generators."""
    image = _load_image(path)
    _emit(_ai_client(client).analyze_floral_image(image))


@app.command()
def refine(
    path: Path = typer.Argument(..., help="Product photo"),
    instruction: str = typer.Option(..., "--instruction", "-i", help="What to change in the caption"),
    previous: str | None = typer.Option(None, "--previous", help="Previous caption to refine"),
    client: str | None = typer.Option(None, "--client", help=CLIENT_HELP),
) -> None:
    """Refine a previous caption with a free-text instruction."""
    image = _load_image(path)
    _emit(_ai_client(client).refine_floral_prompt(image, previous, instruction))


@app.command()
def sentiment(
    recipient: str = typer.Argument(..., help="Who receives the flowers"),
    occasion: str = typer.Argument(..., help="Occasion, e.g. cumpleaños"),
    tone: str = typer.Option("romántico", "--tone", help="Tone of the message"),
    client: str | None = typer.Option(None, "--client", help=CLIENT_HELP),
) -> None:
    """Write a short Spanish greeting-card message."""
    _emit(_ai_client(client).generate_sentiment_message(recipient, occasion, tone))


@app.command()
def inspire(
    prompt: str = typer.Argument(..., help="Description of the arrangement"),
    client: str | None = typer.Option(None, "--client", help=CLIENT_HELP),
) -> None:
    """Request an inspiration image (not supported by the text/vision endpoint)."""
    _emit(_ai_client(client).generate_floral_inspiration(prompt))


@app.command("config")
def show_config() -> None:
    """Show the effective configuration (API key masked)."""
    cfg = get_config()
    table = Table(title=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    for key, value in cfg.model_dump().items():
        if key == "gemini_api_key":
            value = mask_secret(value)
        table.add_row(key, str(value))
    console = Console()
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
