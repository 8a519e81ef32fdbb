"""
Command-line interface for Storefront Assistant.
"""

import asyncio
import json
import logging
import mimetypes
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="storefront-assistant",
    help="Rule-based storefront shopping assistant with spoken responses",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def setup(
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
):
    """Configure logging and settings."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    if config:
        from storefront_assistant.config import load_config, set_config

        try:
            set_config(load_config(config))
        except FileNotFoundError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option(None, "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(None, "--port", "-p", help="Port to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
    preload_tts: str = typer.Option("gtts", "--preload-tts", help="TTS backend to load on startup"),
    preload_stt: str = typer.Option(None, "--preload-stt", help="STT backend to load on startup (e.g., 'vosk')"),
):
    """Start the assistant server."""
    import os

    from storefront_assistant.config import get_config

    # Pass preload config via environment variables
    if preload_tts:
        os.environ["STOREFRONT_ASSISTANT_PRELOAD_TTS"] = preload_tts
    if preload_stt:
        os.environ["STOREFRONT_ASSISTANT_PRELOAD_STT"] = preload_stt

    from storefront_assistant.server.app import run_server

    config = get_config()
    console.print(
        f"[green]Starting server on {host or config.server.host}:{port or config.server.port}[/green]"
    )
    if preload_tts:
        console.print(f"[dim]Preloading TTS: {preload_tts}[/dim]")
    if preload_stt:
        console.print(f"[dim]Preloading STT: {preload_stt}[/dim]")

    run_server(host=host, port=port, reload=reload)


def _print_result(result) -> None:
    from storefront_assistant.client.view_state import StorefrontViewState

    status = StorefrontViewState().apply(result)

    console.print(f"\n[bold]{result.response_text}[/bold]")
    console.print(f"[dim]{status}[/dim]")
    console.print_json(json.dumps({"action": result.action, "params": result.params}))
    if result.audio:
        console.print(f"[dim]Audio: {len(result.audio)} chars of data URI[/dim]")
    elif result.action:
        console.print("[dim]No audio[/dim]")


async def _perform(result) -> None:
    """Run the avatar sequence for a result, speaking its audio."""
    from storefront_assistant.client.playback import NullAudioPlayer, SubprocessAudioPlayer
    from storefront_assistant.client.sequencer import ReactionSequencer, ResultArrived, VisualState
    from storefront_assistant.core.audio import find_audio_player

    done = asyncio.Event()

    def show(visual) -> None:
        label = visual.state.value
        if visual.reaction:
            label += f" ({visual.reaction.value})"
        console.print(f"[magenta]avatar:[/magenta] {label} [dim]{visual.animation.asset}[/dim]")
        if visual.state is VisualState.WAITING:
            done.set()

    if find_audio_player() is None:
        console.print("[yellow]No audio player found, running the avatar sequence silently[/yellow]")
        player = NullAudioPlayer()
    else:
        player = SubprocessAudioPlayer()

    sequencer = ReactionSequencer(player)
    sequencer.add_listener(show)
    sequencer.dispatch(ResultArrived(result))

    if sequencer.visual.state is not VisualState.WAITING:
        await done.wait()
    sequencer.close()


@app.command()
def ask(
    text: str = typer.Argument(..., help="Query, e.g. 'sort by price descending'"),
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Assistant server URL"),
    speak: bool = typer.Option(False, "--speak", help="Synthesize and play the response"),
):
    """Ask the assistant a question."""
    import httpx

    from storefront_assistant.assistant.actions import AssistantResult

    if server:
        from storefront_assistant.client.api import AssistantClient

        try:
            with AssistantClient(base_url=server) as client:
                result = client.query(text)
        except httpx.HTTPError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    elif speak:
        from storefront_assistant.assistant.handler import QueryHandler
        from storefront_assistant.config import get_config
        from storefront_assistant.core.engine import SpeechEngine

        engine = SpeechEngine()
        engine.load_tts_backend(get_config().tts.default_backend)
        result = asyncio.run(QueryHandler(engine).handle(text))

    else:
        from storefront_assistant.assistant.classifier import classify
        from storefront_assistant.assistant.responses import describe

        action = classify(text)
        result = AssistantResult.from_action(action, describe(action), audio="")

    _print_result(result)

    if speak:
        asyncio.run(_perform(result))


@app.command()
def listen(
    audio: Path = typer.Argument(..., help="Recording to send (webm, ogg, wav, mp3)"),
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Assistant server URL"),
    speak: bool = typer.Option(False, "--speak", help="Play the spoken response"),
):
    """Transcribe a recording and run it as a query."""
    if not audio.exists():
        console.print(f"[red]Error: File not found: {audio}[/red]")
        raise typer.Exit(1)

    data = audio.read_bytes()

    if server:
        from storefront_assistant.client.api import AssistantClient

        content_type = mimetypes.guess_type(audio.name)[0] or "audio/webm"
        with AssistantClient(base_url=server) as client:
            voice = client.send_audio(data, filename=audio.name, content_type=content_type)
    else:
        from storefront_assistant.assistant.handler import QueryHandler
        from storefront_assistant.config import get_config
        from storefront_assistant.core.engine import SpeechEngine

        config = get_config()
        engine = SpeechEngine()

        console.print(f"[dim]Loading {config.stt.default_backend} backend...[/dim]")
        engine.load_stt_backend(config.stt.default_backend)
        engine.load_tts_backend(config.tts.default_backend)

        voice = asyncio.run(QueryHandler(engine).handle_speech(data))

    if voice.error:
        console.print(f"[yellow]{voice.error}[/yellow]")
        raise typer.Exit(1)

    confidence = f" ({voice.confidence:.2f})" if voice.confidence is not None else ""
    console.print(f"[bold]Heard:[/bold] {voice.text}{confidence}")

    if voice.result is not None:
        _print_result(voice.result)
        if speak:
            asyncio.run(_perform(voice.result))


@app.command()
def commands(
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Ask a running server instead"),
):
    """List the commands the assistant understands."""
    if server:
        import httpx

        from storefront_assistant.client.api import AssistantClient

        try:
            with AssistantClient(base_url=server) as client:
                catalog = client.get_commands()
        except httpx.HTTPError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
    else:
        from storefront_assistant.assistant.commands import list_commands

        catalog = list_commands()

    table = Table(title="Assistant Commands")
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Params")
    table.add_column("Examples", style="dim")

    for cmd in catalog:
        table.add_row(
            cmd["action"],
            cmd["description"],
            ", ".join(cmd["params"]),
            "\n".join(cmd["examples"]),
        )

    console.print(table)


@app.command()
def info(
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Show a running server's backends"),
):
    """Show configuration and available backends."""
    if server:
        import httpx

        from storefront_assistant.client.api import AssistantClient

        try:
            with AssistantClient(base_url=server) as client:
                server_info = client.get_server_info()
        except httpx.HTTPError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

        console.print(f"\n[bold]Server {server}[/bold]")
        console.print_json(json.dumps(server_info))
        return

    from storefront_assistant import __version__
    from storefront_assistant.config import get_config
    from storefront_assistant.core.audio import find_audio_player
    from storefront_assistant.stt.registry import list_stt_backends
    from storefront_assistant.tts.registry import list_tts_backends

    config = get_config()

    console.print(f"\n[bold]Storefront Assistant v{__version__}[/bold]\n")

    table = Table(title="Settings")
    table.add_column("Property")
    table.add_column("Value")

    table.add_row("Server", f"{config.server.host}:{config.server.port}")
    table.add_row("Client URL", config.client.base_url)
    table.add_row("TTS", f"{config.tts.default_backend} ({config.tts.default_language}, {config.tts.default_voice})")
    table.add_row("STT", f"{config.stt.default_backend} ({config.stt.model_path or config.stt.model_name})")
    player = find_audio_player()
    table.add_row("Audio Player", player[0] if player else "[red]none found[/red]")

    console.print(table)

    console.print("\n[bold]TTS Backends[/bold]")
    tts_backends = list_tts_backends()
    if tts_backends:
        for b in tts_backends:
            network = "[yellow]network[/yellow]" if b.get("requires_network") else ""
            console.print(f"  - {b['name']} {network}")
    else:
        console.print("  [dim]None available[/dim]")

    console.print("\n[bold]STT Backends[/bold]")
    stt_backends = list_stt_backends()
    if stt_backends:
        for b in stt_backends:
            console.print(f"  - {b['name']} [dim]{b['sample_rate']} Hz[/dim]")
    else:
        console.print("  [dim]None available[/dim]")

    console.print()


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
