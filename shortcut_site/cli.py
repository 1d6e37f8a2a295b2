# === FILE: shortcut_site/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the Shortcut static site builder.

Commands:
  generate  Build one configured site and print a JSON report
  sites     List configured sites
  config    Show the effective configuration (API keys masked)

Common options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)
  --log-format FORMAT Logging format string

Extra:
  --version, -v       Show the version

Example:
  shortcut-site --config configs/default.yaml generate acme --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from shortcut_site import __version__
from shortcut_site.config import load_config
from shortcut_site.engine import build_site
from shortcut_site.errors import SiteBuilderError
from shortcut_site.logger import init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='shortcut-site, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file path (stderr only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Shortcut static site builder."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('generate', context_settings=CONTEXT_SETTINGS)
@click.argument('site_key', required=False)
@click.option(
    '--pretty', is_flag=True,
    help='Indent the JSON report'
)
@click.pass_context
def generate(ctx, site_key, pretty):
    """Generate SITE_KEY (name or slug); optional with a single configured site."""
    cfg = ctx.obj['config']
    try:
        site = cfg.get_site(site_key)
    except SiteBuilderError as e:
        print_error(f'{e.message} (available: {", ".join(e.detail or []) or "none"})')

    click.echo(f'Generating {site.name} into {cfg.output_dir / site.slug}', err=True)
    try:
        report = asyncio.run(build_site(site, cfg))
    except SiteBuilderError as e:
        print_error(f'Site generation failed: {e.message}')
    except Exception as e:
        print_error(f'Site generation failed: {e}')

    click.echo(report.json(pretty=pretty))
    if report.images.failed:
        click.secho(f'{len(report.images.failed)} image(s) could not be downloaded', fg='yellow', err=True)
    click.secho('Your site is ready!', fg='green', err=True)


@cli.command('sites', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def list_sites(ctx):
    """List configured sites."""
    cfg = ctx.obj['config']
    if not cfg.sites:
        click.echo('No sites configured.')
        return
    for site in cfg.sites:
        click.echo(f'{site.slug}\t{site.name}\tobjective {site.objective_id}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.masked(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
