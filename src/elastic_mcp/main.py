"""
Main entry point for the Elasticsearch MCP server CLI.

This module provides the command-line interface: starting the MCP server
and checking the connection configuration.
"""

import asyncio
import json

import click

from elastic_mcp.mcp.mcp_main import main as run_mcp_main
from elastic_mcp.utils.helpers import load_settings_or_exit
from elastic_mcp.utils.logging import setup_logging

logger = setup_logging(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Elasticsearch MCP server - index, mapping and search tools over MCP."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command()
@click.option('--url', help='Elasticsearch URL (overrides ES_URL)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def mcp(ctx: click.Context, url: str | None, debug: bool) -> None:
    """Start the MCP server on stdio."""
    overrides = {}
    if url:
        overrides['url'] = url
    if debug or ctx.obj.get('verbose', False):
        overrides['log_level'] = 'DEBUG'

    settings = load_settings_or_exit(**overrides)
    logger.debug(f"Starting MCP server for {settings.url}")
    asyncio.run(run_mcp_main(settings))


@cli.command('check-config')
def check_config() -> None:
    """Validate the configuration and print it with secrets masked."""
    settings = load_settings_or_exit()
    click.echo(json.dumps(settings.masked(), indent=2))
    click.echo("Configuration OK")


if __name__ == '__main__':
    cli()
