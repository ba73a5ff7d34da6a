import json
import click

from .config import load_settings
from .directory import list_printers
from .errors import LabelctlError
from .files import discover_pending
from .log import configure_logging
from .runner import run
from .subsystem import get_subsystem


def _settings(**overrides):
    try:
        return load_settings(**overrides)
    except ValueError as e:
        raise click.UsageError(str(e))


@click.group(help="labelctl: print queued label files and track each job")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def cli(verbose):
    configure_logging(verbose)


# ---------- Run ----------
@cli.command("run", help="Pick a printer and print every pending label file")
@click.option("--dir", "watch_dir", default=None, help="Directory holding the label files")
@click.option("--timeout", default=None,
              help="Per-job completion timeout, e.g. 60, 90s, 2m")
@click.option("--base-name", default=None, help="Printer name pattern (substring match)")
@click.option("--extra-name", "extra_names", multiple=True,
              help="Additional exact printer name (repeatable)")
@click.option("--printer", "choice", default=None, help="Printer number, skips the prompt")
def run_cmd(watch_dir, timeout, base_name, extra_names, choice):
    settings = _settings(
        watch_dir=watch_dir,
        timeout_seconds=timeout,
        base_name=base_name,
        extra_names=list(extra_names) or None,
    )
    try:
        run(settings, choice=choice)
    except LabelctlError as e:
        click.secho(f"Error: {e}", fg="red")
        raise SystemExit(1)


# ---------- Printers ----------
@cli.command("printers", help="List printers matching the configured names")
@click.option("--base-name", default=None, help="Printer name pattern (substring match)")
@click.option("--extra-name", "extra_names", multiple=True,
              help="Additional exact printer name (repeatable)")
def printers_cmd(base_name, extra_names):
    settings = _settings(base_name=base_name, extra_names=list(extra_names) or None)
    try:
        printers = list_printers(get_subsystem(settings), settings.base_name, settings.extra_names)
    except LabelctlError as e:
        click.secho(f"Error: {e}", fg="red")
        raise SystemExit(1)

    if not printers:
        click.echo("No printers.")
        return

    for i, name in enumerate(printers, start=1):
        click.echo(f"{i}: {name}")


# ---------- Pending ----------
@cli.command("pending", help="List label files waiting to be printed")
@click.option("--dir", "watch_dir", default=None, help="Directory holding the label files")
def pending_cmd(watch_dir):
    settings = _settings(watch_dir=watch_dir)
    try:
        files = discover_pending(settings.watch_dir, settings.label_ext)
    except LabelctlError as e:
        click.secho(f"Error: {e}", fg="red")
        raise SystemExit(1)

    if not files:
        click.echo("No pending files.")
        return

    for f in files:
        click.echo(f"{f.state:<8} | {f.path}")


# ---------- Config ----------
@cli.group("config", help="Configuration")
def config_group():
    pass


@config_group.command("get")
def config_get():
    click.echo(json.dumps(_settings().to_dict(), indent=2))


def main():
    cli()
