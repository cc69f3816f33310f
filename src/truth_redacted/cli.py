"""Command-line entry point for truth-redacted."""

from __future__ import annotations

import json
import logging
import sys

import click

from .commands import download as download_cmd
from .commands import load as load_cmd
from .commands import redact as redact_cmd
from .commands import serve as serve_cmd
from .commands import show as show_cmd
from .core.config import ConfigManager, DEFAULT_CONFIG_PATH, FEED_FORMATS, REDACTION_MODES

# Setup logging early so submodules inherit sane defaults
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@click.group()
@click.option(
    "--config",
    default=str(DEFAULT_CONFIG_PATH),
    show_default=True,
    help="Path to config file (defaults to data_dir/config/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool) -> None:
    """truth-redacted - original vs. redacted government document snippets."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command("load")
@click.option("--url", help="Feed URL or local file (overrides feed.url)")
@click.option("--format", "fmt", type=click.Choice(FEED_FORMATS), help="Feed format (overrides feed.format)")
@click.option("--output", "-o", help="Write the normalized entries to this JSON file")
@click.pass_context
def load(ctx: click.Context, url: str | None, fmt: str | None, output: str | None) -> None:
    """Fetch the feed and normalize it into original/redacted entries."""
    try:
        payload = load_cmd.run(ctx.obj["config_path"], url=url, fmt=fmt, output=output)
        if not output:
            click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        stats = payload["stats"]
        origin = "sample data" if payload["origin"] == "sample" else "live feed"
        click.echo(
            f"✅ Loaded {stats['documents']} entries ({stats['changes']} changes) from {origin}",
            err=not output,
        )
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Load command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("redact")
@click.argument("text")
@click.option("--mode", type=click.Choice(REDACTION_MODES), help="Redaction variant (overrides redaction.mode)")
@click.pass_context
def redact(ctx: click.Context, text: str, mode: str | None) -> None:
    """Redact TEXT and print the result."""
    try:
        result = redact_cmd.run(ctx.obj["config_path"], text, mode)
        click.echo(result["redacted"])
        if result["highlights"]:
            click.echo(f"🔎 Watch-list words: {', '.join(result['highlights'])}", err=True)
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Redact command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("download")
@click.option("--url", help="Snapshot URL (defaults to the current quarter-hour GDG snapshot)")
@click.option("--output", "-o", help="Destination file (overrides download.output)")
@click.pass_context
def download(ctx: click.Context, url: str | None, output: str | None) -> None:
    """Download a gzipped GDG snapshot and save it as JSON."""
    try:
        target = download_cmd.run(ctx.obj["config_path"], url=url, output=output)
        click.echo(f"✅ Data saved to {target}")
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Download command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("serve")
@click.option("--host", help="Bind address (overrides server.host)")
@click.option("--port", type=int, help="Port (overrides server.port)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Run the JSON API / proxy server."""
    try:
        serve_cmd.run(ctx.obj["config_path"], host=host, port=port)
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Server failed: {exc}", err=True)
        sys.exit(1)


@cli.command("show")
@click.option("--count", "-n", default=5, show_default=True, type=int, help="Number of entries to print")
@click.option(
    "--theme",
    type=click.Choice(show_cmd.THEME_ORDER),
    default="cyber",
    show_default=True,
    help="Color theme",
)
@click.option("--interval", default=0.0, type=float, help="Seconds to wait between entries")
@click.option("--seed", type=int, help="Random seed for entry selection")
@click.option("--cycle-themes", is_flag=True, help="Switch to the next theme after every entry")
@click.option("--no-color", is_flag=True, help="Plain text output")
@click.pass_context
def show(
    ctx: click.Context,
    count: int,
    theme: str,
    interval: float,
    seed: int | None,
    cycle_themes: bool,
    no_color: bool,
) -> None:
    """Print random entries as before/after blocks."""
    try:
        show_cmd.run(
            ctx.obj["config_path"],
            count=count,
            theme=theme,
            interval=interval,
            seed=seed,
            cycle_themes=cycle_themes,
            color=not no_color,
        )
    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Show command failed: {exc}", err=True)
        sys.exit(1)


@cli.command("status")
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration status."""
    try:
        config_manager = ConfigManager(ctx.obj["config_path"])
        click.echo(f"📄 Config file: {config_manager.config_path}")

        if config_manager.validate_config():
            click.echo("✅ Configuration is valid")
        else:
            click.echo("❌ Configuration validation failed")
            return

        feed_cfg = config_manager.get_feed_config()
        click.echo(f"📡 Feed: {feed_cfg.get('url') or '(none, sample data only)'}")
        click.echo(f"   Format: {feed_cfg.get('format', 'auto')}  Pairing: {feed_cfg.get('pairing', 'redact')}")

        redaction_cfg = config_manager.get_redaction_config()
        click.echo(f"✂️  Redaction mode: {redaction_cfg.get('mode', 'soften')}")

        server_cfg = config_manager.get_server_config()
        source = server_cfg.get('remote_url') if server_cfg.get('mode') == 'remote' else server_cfg.get('data_file')
        click.echo(
            f"🌐 Server: {server_cfg.get('host', '127.0.0.1')}:{server_cfg.get('port', 3000)} "
            f"({server_cfg.get('mode', 'local')}: {source})"
        )

    except Exception as exc:  # pragma: no cover - click echoes the message
        click.echo(f"❌ Error checking status: {exc}", err=True)


if __name__ == "__main__":  # pragma: no cover - script entry
    cli()
