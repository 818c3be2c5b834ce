"""
abisync — CLI entrypoint.

Usage:
    python -m abisync.main --help
    python -m abisync.main resolve -P target-platform=android-arm
    python -m abisync.main reconcile --build-dir app/build
    python -m abisync.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from abisync import __version__
from abisync.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)


def _parse_property_option(
    ctx: click.Context, param: click.Parameter, value: tuple[str, ...],
) -> dict[str, str]:
    from abisync.core.config.loader import parse_properties
    from abisync.core.errors import ConfigError

    try:
        return parse_properties(value)
    except ConfigError as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="abisync")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to abisync.yml (default: auto-detect).",
)
@click.option(
    "--property",
    "-P",
    "properties",
    multiple=True,
    callback=_parse_property_option,
    help="Build property as key=value (e.g. -P support-armeabi=1).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    properties: dict[str, str],
) -> None:
    """abisync — resolve ABIs and populate armeabi from armeabi-v7a."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["properties"] = properties

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--build-type",
    "-t",
    default="release",
    show_default=True,
    help="Build type to show the ABI filter for.",
)
@click.pass_context
def resolve(ctx: click.Context, as_json: bool, build_type: str) -> None:
    """Show the resolved ABI set and armeabi strategy."""
    from abisync.core.use_cases.resolve import resolve_build

    result = resolve_build(
        config_path=ctx.obj.get("config_path"),
        properties=ctx.obj.get("properties"),
        build_type=build_type,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    settings = result.settings
    assert settings is not None

    click.secho("\n🧩 ABI resolution", fg="cyan", bold=True)
    if result.config_path:
        click.echo(f"   Config: {result.config_path}")
    click.echo(f"   ABIs: {', '.join(sorted(settings.abis))}")
    click.echo(f"   armeabi strategy: {settings.strategy.label}")
    if settings.split_per_abi:
        click.secho("   Split per ABI: no ABI filter, one artifact per ABI", fg="yellow")
    else:
        abi_filter = result.abi_filter or frozenset()
        click.echo(f"   Filter ({build_type}): {', '.join(sorted(abi_filter))}")
    click.echo()


@cli.group()
def config() -> None:
    """Build configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate abisync.yml."""
    from abisync.core.use_cases.config_check import check_config

    result = check_config(
        config_path=ctx.obj.get("config_path"),
        properties=ctx.obj.get("properties"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        assert result.settings is not None
        assert result.build_file is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   ABIs: {', '.join(sorted(result.settings.abis))}")
        click.echo(f"   Strategy: {result.settings.strategy.label}")
        click.echo(f"   Variants: {len(result.build_file.variants)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Register sub-commands from abisync/ui/cli/ ────────────────────

from abisync.ui.cli.reconcile import reconcile, tasks  # noqa: E402

cli.add_command(reconcile)
cli.add_command(tasks)


if __name__ == "__main__":
    cli()
