"""
Command-line interface for matchset.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from matchset.config import load_config
from matchset.__version__ import __version__
from matchset.context import MatchSetContext
from matchset.exceptions import ConfigError, MatchSetError
from matchset.utils.logger import get_logger, setup_logging
from matchset.utils.console import configure_console, print_error, print_warning

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="MATCHSET_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="MATCHSET_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="matchset",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """matchset: boolean algebra over package-version constraints.

    \b
    Available commands:
      matchset check       Check candidates against requirements
      matchset combine     Intersect, unite or complement requirements

    \b
    Examples:
      matchset check 1.7 -s ">=1.0,<2.0" -s ">=1.5"
      matchset combine -s ">=1.0,<2.0" -s ">=1.5,<3.0"
      matchset -vv combine -s "==1.2.3" --complement

    Use ``matchset COMMAND --help`` for command-specific options.
    """
    setup_logging(verbose, color=color)
    configure_console(color=color)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    matchset_ctx = MatchSetContext()
    matchset_ctx.config_path = config or loaded_config.source_path
    matchset_ctx.color = color
    matchset_ctx.verbose = verbose
    matchset_ctx.config = loaded_config
    ctx.obj = matchset_ctx

    logger.debug("matchset v%s", __version__)
    logger.debug("Config path: %s", matchset_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


from matchset.commands.check import check  # noqa: E402
from matchset.commands.combine import combine  # noqa: E402

cli.add_command(check)
cli.add_command(combine)


def main() -> int:
    """Main entry point for the matchset CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except MatchSetError as exc:
        print_error(str(exc))
        logger.debug(
            "MatchSetError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
