# openrouter_flow/cli.py

import asyncio
from pathlib import Path
from typing import Optional

import questionary
import typer
from dotenv import set_key
from loguru import logger

from . import __version__
from .catalog.cache import ModelCache
from .config import Settings
from .device.host import OpenRouterDevice, OpenRouterDriver, PairingError
from .device.interfaces import CapabilityStore
from .llm.errors import OpenRouterError
from .llm.models import DEFAULT_MODEL
from .utils.logger import setup_logging

app = typer.Typer(
    name="openrouter-flow",
    help="Generate text with OpenRouter from home-automation flows",
    add_completion=False,
)


def version_callback(value: bool):
    """Print version information."""
    if value:
        typer.echo(f"openrouter-flow v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
        version: Optional[bool] = typer.Option(
            None,
            "--version",
            "-v",
            help="Show version information.",
            callback=version_callback,
            is_eager=True,
        ),
        debug: bool = typer.Option(
            False,
            "--debug",
            "-d",
            help="Enable debug logging.",
        ),
):
    """openrouter-flow - OpenRouter text generation for home automations."""
    setup_logging(debug)


def _run(coro):
    # asyncio.run cancels and awaits leftover tasks, also on Ctrl-C
    return asyncio.run(coro)


def _build(settings: Settings):
    client = settings.client()
    driver = OpenRouterDriver(client, ModelCache(client, ttl=settings.cache_ttl))
    device = OpenRouterDevice(
        client,
        settings.device_settings(),
        CapabilityStore(),
        interval=settings.probe_interval,
    )
    return driver, device


@app.command()
def models(
        query: str = typer.Argument("", help="Text to match against model ids and names"),
):
    """List models the way the flow editor's autocomplete shows them."""
    driver, device = _build(Settings.from_env())
    items = _run(driver.autocomplete_models(query, device))
    if not items:
        typer.echo("No matching models.")
        return
    for item in items:
        typer.echo(f"{item['id']:<50} {item['name']}")


@app.command()
def generate(
        prompt: str = typer.Argument(..., help="Prompt to send"),
        model: Optional[str] = typer.Option(
            None,
            "--model",
            "-m",
            help="Model id (defaults to OPENROUTER_DEFAULT_MODEL)",
        ),
        system: Optional[str] = typer.Option(
            None,
            "--system",
            "-s",
            help="System prompt sent before the user prompt",
        ),
):
    """Generate text, as the flow action cards do."""
    driver, device = _build(Settings.from_env())
    args = {"device": device, "model": model, "prompt": prompt}
    try:
        if system:
            args["system_prompt"] = system
            result = _run(driver.run_generate_with_context(args))
        else:
            result = _run(driver.run_generate_text(args))
    except OpenRouterError as e:
        logger.error(f"Generation failed: {e}")
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    typer.echo(result["response"])


@app.command()
def status():
    """Probe OpenRouter once and print the online flag and remaining credits."""
    _, device = _build(Settings.from_env())
    _run(device.monitor.refresh())

    snapshot = device.sink.snapshot
    typer.echo(f"Online: {'yes' if snapshot.online else 'no'}")
    if snapshot.credits_remaining is None:
        typer.echo("Credits: unavailable")
    else:
        typer.echo(f"Credits: ${snapshot.credits_remaining:.2f}")


@app.command()
def pair(
        env_file: Path = typer.Option(
            Path(".env"),
            "--env-file",
            help="File the validated settings are written to",
        ),
):
    """Validate an API key and store it with the default model."""
    settings = Settings.from_env(env_file)
    driver = OpenRouterDriver(settings.client())
    session = driver.pair()

    api_key = questionary.password("OpenRouter API key:").ask()
    if api_key is None:
        logger.info("User interrupted pairing")
        raise typer.Exit(code=1)
    default_model = questionary.text("Default model:", default=DEFAULT_MODEL).ask()

    try:
        _run(session.login(api_key, default_model))
    except PairingError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(code=1)

    device = session.list_devices()[0]
    env_file.touch(exist_ok=True)
    set_key(str(env_file), "OPENROUTER_API_KEY", device["settings"]["apiKey"])
    set_key(str(env_file), "OPENROUTER_DEFAULT_MODEL", device["settings"]["defaultModel"])
    typer.echo(f"Paired {device['name']} ({device['data']['id']}), settings saved to {env_file}")


async def watch_device(device: OpenRouterDevice, echo=typer.echo):
    """Start the device, print its status every interval, stop it on exit."""
    await device.on_init()
    try:
        while True:
            snapshot = device.sink.snapshot
            echo(f"online={snapshot.online} credits={snapshot.credits_remaining}")
            await asyncio.sleep(device.monitor.interval)
    finally:
        await device.on_deleted()


@app.command()
def watch():
    """Run the status probes on their interval until interrupted."""
    _, device = _build(Settings.from_env())

    try:
        _run(watch_device(device))
    except KeyboardInterrupt:
        typer.echo("Stopped.")


if __name__ == "__main__":
    app()
