"""
CLI commands for armeabi reconciliation.

Thin wrappers over ``abisync.core.use_cases.reconcile``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

_build_dir_option = click.option(
    "--build-dir",
    "-b",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Gradle build directory to discover variants in.",
)
_variant_option = click.option(
    "--variant",
    "variants",
    multiple=True,
    help="Only these variants (repeatable).",
)
_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.",
)


def _run(ctx: click.Context, build_dir: Path | None, variants: tuple[str, ...], dry_run: bool):
    from abisync.core.use_cases.reconcile import run_reconcile

    return run_reconcile(
        config_path=ctx.obj.get("config_path"),
        properties=ctx.obj.get("properties"),
        build_dir=build_dir,
        variants=list(variants) if variants else None,
        dry_run=dry_run,
    )


@click.command()
@_build_dir_option
@_variant_option
@_json_option
@click.pass_context
def tasks(ctx: click.Context, build_dir: Path | None, variants: tuple[str, ...], as_json: bool) -> None:
    """Show the reconciliation tasks and what they run after."""
    result = _run(ctx, build_dir, variants, dry_run=True)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.plan is not None
    if not result.plan.tasks:
        click.secho("⊘ No reconciliation tasks (strategy none or no variants)", fg="yellow")
        return

    click.secho(f"\n📋 Tasks: {result.plan.total}", fg="cyan", bold=True)
    for task in result.plan.tasks:
        click.echo(f"   • {task.name}  (after {task.runs_after})")
        if ctx.obj.get("verbose"):
            click.echo(f"     │ {task.output_root}")
    click.echo()


@click.command()
@_build_dir_option
@_variant_option
@click.option("--dry-run", is_flag=True, help="Plan but don't touch any output tree.")
@_json_option
@click.pass_context
def reconcile(
    ctx: click.Context,
    build_dir: Path | None,
    variants: tuple[str, ...],
    dry_run: bool,
    as_json: bool,
) -> None:
    """Populate armeabi from armeabi-v7a for every variant.

    Examples:

        abisync -P support-armeabi=1 reconcile --build-dir app/build

        abisync reconcile --variant release --dry-run
    """
    result = _run(ctx, build_dir, variants, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if result.error and not result.results:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.settings is not None
    assert result.plan is not None

    mode_label = "[dry-run] " if dry_run else ""
    click.secho(
        f"\n⚡ {mode_label}armeabi strategy: {result.settings.strategy.label}",
        fg="cyan",
        bold=True,
    )

    if not result.plan.tasks:
        click.secho("   ⊘ Nothing to reconcile", fg="yellow")
        click.echo()
        return

    if dry_run:
        for task in result.plan.tasks:
            click.echo(f"   • {task.variant.name}  → {task.output_root}")
        click.echo()
        return

    for res in result.results:
        if res.status == "reconciled":
            click.secho(f"   ✓ {res.variant}", fg="green", nl=False)
            removed = ", armeabi-v7a removed" if res.removed_predecessor else ""
            click.echo(f" ({len(res.copied)} copied, {len(res.kept)} kept{removed})")
            if ctx.obj.get("verbose"):
                for name in res.copied:
                    click.echo(f"     │ {name}")
        elif res.status == "skipped":
            click.secho(f"   ⊘ {res.variant} ", fg="yellow", nl=False)
            click.echo(f"({res.reason})")
        else:
            click.secho(f"   ✗ {res.variant}", fg="red")
            click.echo(f"     │ {res.error}")

    click.echo()
    if not result.ok:
        sys.exit(1)
