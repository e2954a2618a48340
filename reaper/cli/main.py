"""Main CLI entrypoint for docker-reaper."""

import json
import logging
import signal
import sys
from typing import Any, Dict

import click

from ..cleanup.executor import DEFAULT_WORKERS
from ..cleanup.models import ResourceKind, RunReport
from ..config import RunConfig
from ..durations import parse_duration
from ..engine import connect
from ..errors import ConfigError, ReaperError
from ..pipeline import run_cycle
from ..report import render_table, report_to_dict
from ..scheduler import CycleScheduler
from ..selectors import parse_filters

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DURATION_NOTE = "Note: <duration> values accept Go-style duration strings (e.g. 1m30s)"


def _duration_callback(ctx, param, value):
    if value is None:
        return None
    try:
        return parse_duration(value)
    except ConfigError as e:
        raise click.BadParameter(str(e))


def _filters_callback(ctx, param, value):
    try:
        return parse_filters(value)
    except ConfigError as e:
        raise click.BadParameter(str(e))


def common_options(func):
    """Options shared by every resource subcommand."""
    options = [
        click.option('--min-age', type=str, metavar='<duration>', callback=_duration_callback,
                     help='Only reap resources older than this duration'),
        click.option('--max-age', type=str, metavar='<duration>', callback=_duration_callback,
                     help='Only reap resources younger than this duration'),
        click.option('--filter', '-f', 'selector', multiple=True, metavar='NAME=VALUE',
                     callback=_filters_callback,
                     help='Only reap resources matching a Docker Engine-supported filter (repeatable)'),
        click.option('--dry-run', '-d', is_flag=True, help='Report eligible resources without removing them'),
        click.option('--every', 'interval', type=str, metavar='<duration>', callback=_duration_callback,
                     help='Repeat the sweep, waiting this long after each run'),
        click.option('--workers', type=click.IntRange(1, 64), default=DEFAULT_WORKERS, show_default=True,
                     help='Maximum concurrent removal requests'),
        click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(epilog=DURATION_NOTE)
@click.option('--log-level', envvar='REAPER_LOG_LEVEL', default='INFO', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging verbosity')
@click.pass_context
def main(ctx, log_level):
    """docker-reaper - Remove expired Docker containers, networks and volumes."""
    ctx.ensure_object(dict)
    ctx.obj.setdefault('engine_factory', connect)
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)


@main.command(epilog=DURATION_NOTE)
@common_options
@click.option('--reap-networks', is_flag=True, help='Also remove the networks attached to reaped containers')
@click.pass_context
def containers(ctx, reap_networks, **options):
    """Reap matching expired containers."""
    _run(ctx, ResourceKind.CONTAINER, reap_networks=reap_networks, **options)


@main.command(epilog=DURATION_NOTE)
@common_options
@click.pass_context
def networks(ctx, **options):
    """Reap matching expired networks."""
    _run(ctx, ResourceKind.NETWORK, **options)


@main.command(epilog=DURATION_NOTE)
@common_options
@click.pass_context
def volumes(ctx, **options):
    """Reap matching expired volumes."""
    _run(ctx, ResourceKind.VOLUME, **options)


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


def _print_report(report: RunReport, output_json: bool) -> None:
    if output_json:
        _json_output(report_to_dict(report))
    elif len(report):
        click.echo(render_table(report))
    else:
        click.echo(f"No matching {report.kind.value}s")


def _run(ctx, kind: ResourceKind, output_json: bool, **options) -> None:
    try:
        config = RunConfig.build(kind=kind, **options)
    except ConfigError as e:
        raise click.UsageError(str(e), ctx=ctx)

    try:
        engine = ctx.obj['engine_factory']()
    except ReaperError as e:
        _fail(str(e), output_json)

    scheduler = CycleScheduler(interval=config.interval)

    def request_stop(signum, frame):
        logger.info(f"Received signal {signum}, stopping after the current run")
        scheduler.stop()

    previous = {sig: signal.signal(sig, request_stop) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        scheduler.run(
            lambda: run_cycle(engine, config),
            on_report=lambda report: _print_report(report, output_json),
        )
    except ReaperError as e:
        _fail(str(e), output_json)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    sys.exit(0)


def _fail(message: str, output_json: bool) -> None:
    logger.error(message)
    if output_json:
        _json_output({'error': message})
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(1)


if __name__ == '__main__':
    main()
