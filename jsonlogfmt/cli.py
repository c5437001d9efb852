"""
Command line entry point: convert JSON log lines on stdin to logfmt on stdout.
"""

import logging
import sys
from dataclasses import asdict
from typing import Optional, Tuple

import click

from jsonlogfmt import __version__
from jsonlogfmt.config import build_config, load_config
from jsonlogfmt.errors import LogfmtError
from jsonlogfmt.logger import get_logger
from jsonlogfmt.stream import LogfmtStream


@click.command()
@click.version_option(version=__version__)
@click.option('-x', '--exclude', 'exclude', multiple=True, metavar='GLOB',
              help="Don't print keys matching this glob (repeatable)")
@click.option('--color/--no-color', default=None,
              help='Highlight keys (default: only when stdout is a terminal)')
@click.option('--pin-at/--no-pin-at', default=None,
              help='Print the "at" key first (default: on)')
@click.option('--array-brackets', is_flag=True,
              help='Render nested objects as [k=v] instead of {k=v}')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              envvar='JSONLOGFMT_CONFIG', help='Path to a YAML settings file')
@click.option('-v', '--verbose', is_flag=True, help='Print diagnostics to stderr')
def main(
    exclude: Tuple[str, ...],
    color: Optional[bool],
    pin_at: Optional[bool],
    array_brackets: bool,
    config_path: Optional[str],
    verbose: bool
):
    """Convert JSON log lines on stdin to logfmt on stdout"""
    logger = get_logger(
        'jsonlogfmt',
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=click.get_text_stream('stderr')
    )

    stdin = click.get_binary_stream('stdin')
    stdout = click.get_binary_stream('stdout')
    stderr = click.get_binary_stream('stderr')

    try:
        settings = load_config(config_path) if config_path else None
        config = build_config(
            settings,
            exclude=exclude,
            color=color,
            pin_at=pin_at,
            object_brackets='[]' if array_brackets else None,
            isatty=stdout.isatty()
        )
    except LogfmtError as e:
        click.echo(click.style(f'jsonlogfmt: {e}', fg='red'), err=True)
        sys.exit(1)

    logger.debug("Starting", extra={'context': {
        'exclude': list(config.exclude),
        'color': config.color,
        'pin_at': config.pin_at,
        'object_brackets': config.object_brackets,
    }})

    stream = LogfmtStream(config, stdin, stdout, stderr)
    try:
        stream.run()
    except BrokenPipeError:
        # click exits quietly with status 1 on EPIPE
        raise
    except (LogfmtError, OSError) as e:
        click.echo(click.style(f'jsonlogfmt: {e}', fg='red'), err=True)
        sys.exit(1)
    finally:
        logger.debug("Finished", extra={'context': asdict(stream.stats)})


if __name__ == '__main__':
    main()
