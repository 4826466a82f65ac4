"""
Main entry point for the DBC parser.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from . import version
from .cmd import run_cli
from .config import Config


logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, path_type=Path)
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Optional JSON parser configuration"
)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Stop at the first malformed record instead of skipping it"
)
@click.option(
    "--strict-names/--no-strict-names",
    default=None,
    help="Require signal names to start with their message name"
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print parsed messages as JSON"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.version_option(version=version())
def main(
    paths: Tuple[Path, ...],
    config_path: Optional[Path],
    strict: Optional[bool],
    strict_names: Optional[bool],
    as_json: bool,
    verbose: bool
) -> None:
    """
    Parse CAN DBC files and print their messages and signals.

    PATHS may be DBC files or directories to search for them.
    """
    try:
        config = Config.load(config_path) if config_path else Config()
    except (OSError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="--config")

    config.apply_log_level()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if strict is not None:
        config.options.strict = strict
    if strict_names is not None:
        config.options.require_signal_prefix = strict_names

    logger.debug(f"Configuration: {config.to_dict()}")
    sys.exit(run_cli(paths, config, as_json))


if __name__ == "__main__":
    main()
