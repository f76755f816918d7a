"""
Common utility functions for the command line interface.
"""

import sys

import click

from elastic_mcp.utils.config import ElasticMCPSettings, load_settings
from elastic_mcp.utils.errors import ConfigurationError


def load_settings_or_exit(**overrides) -> ElasticMCPSettings:
    """
    Load and validate settings, exiting with an error message if invalid.

    Warnings from ``validate_settings`` are echoed to stderr and do not stop
    the process.
    """
    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        for suggestion in e.suggestions:
            click.echo(f"  - {suggestion}", err=True)
        sys.exit(1)

    validation_result = settings.validate_settings()
    if not validation_result.valid:
        for error in validation_result.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)

    for warning in validation_result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    return settings
