#!/usr/bin/env python3
# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""CLI/Imperative shell for SRK."""

import logging
from typing import Optional
from typing import NamedTuple

import click

import srk

from . import errors
from . import shamir
from . import polynom
from . import enc_util
from . import parameters
from . import share_store

try:
    import pretty_traceback

    pretty_traceback.install(envvar='ENABLE_PRETTY_TRACEBACK')
except ImportError:
    pass  # no need to fail because of missing dev dependency


logger = logging.getLogger("srk.cli")


class LogConfig(NamedTuple):
    fmt: str
    lvl: int


LOG_FORMAT_DEFAULT = "%(levelname)-7s - %(message)s"

LOG_FORMAT_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)-16s - %(message)s"


def _parse_logging_config(verbosity: int) -> LogConfig:
    if verbosity == 0:
        return LogConfig(LOG_FORMAT_DEFAULT, logging.WARNING)
    elif verbosity == 1:
        return LogConfig(LOG_FORMAT_VERBOSE, logging.INFO)
    else:
        assert verbosity >= 2
        return LogConfig(LOG_FORMAT_VERBOSE, logging.DEBUG)


_PREV_VERBOSITY: int = -1


def _configure_logging(verbosity: int = 0) -> None:
    # pylint: disable=global-statement
    global _PREV_VERBOSITY

    if verbosity <= _PREV_VERBOSITY:
        # allow function to be called multiple times
        return

    _PREV_VERBOSITY = verbosity

    # remove previous logging handlers
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    log_cfg = _parse_logging_config(verbosity)
    logging.basicConfig(level=log_cfg.lvl, format=log_cfg.fmt, datefmt="%Y-%m-%dT%H:%M:%S")


def echo(msg: str = "") -> bool:
    click.echo(msg)
    return True


_opt_verbose = click.option(
    '-v',
    '--verbose',
    count=True,
    help="Control log level. -vv for debug level.",
)

_opt_threshold = click.option(
    '-k',
    '--threshold',
    type=int,
    default=None,
    help="Number of shares to use (default: 'k' of the share document)",
)

_opt_best_effort = click.option(
    '--best-effort/--strict',
    default=parameters.DEFAULT_BEST_EFFORT,
    show_default=True,
    help="Floor divide inexact terms (with a warning) instead of failing",
)

_opt_base = click.option(
    '-b',
    '--base',
    'base_arg',
    type=str,
    default=str(parameters.DEFAULT_BASE),
    show_default=True,
    help="Numeral base of share values (2-16)",
)


DEFAULT_SCHEME = f"{parameters.DEFAULT_SSS_T}of{parameters.DEFAULT_SSS_N}"


_opt_scheme = click.option(
    '-s',
    '--scheme',
    'scheme_arg',
    type=str,
    default=DEFAULT_SCHEME,
    show_default=True,
    help="Threshold and total Number of shares (format: KofN)",
)

_opt_output = click.option(
    '-o',
    '--output',
    'output_path',
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write share document to file instead of stdout",
)


@click.group(context_settings={'help_option_names': ["-h", "--help"]})
@_opt_verbose
def cli(verbose: int = 0) -> None:
    """CLI for SRK."""
    _configure_logging(verbose)


@cli.command()
def version() -> None:
    """Show version number."""
    echo(f"SRK version: {srk.__version__}")


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@_opt_threshold
@_opt_best_effort
@_opt_verbose
def recover(
    input_path : str,
    threshold  : Optional[int] = None,
    best_effort: bool = parameters.DEFAULT_BEST_EFFORT,
    verbose    : int  = 0,
) -> None:
    """Recover the secret from a share document."""
    _configure_logging(verbose)

    try:
        share_set = share_store.load(input_path)
        if threshold is not None:
            params    = parameters.init_threshold_params(threshold, share_set.params.num_shares)
            share_set = share_set._replace(params=params)

        secret = shamir.reconstruct(share_set, strict=not best_effort)
    except errors.RecoveryError as err:
        raise click.ClickException(str(err))

    echo(enc_util.secret2str(secret))


@cli.command()
@click.argument('digits', type=str)
@_opt_base
@_opt_verbose
def decode(digits: str, base_arg: str, verbose: int = 0) -> None:
    """Show the decimal value of a share value."""
    _configure_logging(verbose)

    try:
        base = enc_util.parse_base(base_arg)
        num  = enc_util.digits2int(digits, base)
    except errors.RecoveryError as err:
        raise click.ClickException(str(err))

    echo(enc_util.secret2str(num))


@cli.command()
@click.argument('secret', type=str)
@_opt_scheme
@_opt_base
@_opt_output
@_opt_verbose
def split(
    secret     : str,
    scheme_arg : str = DEFAULT_SCHEME,
    base_arg   : str = str(parameters.DEFAULT_BASE),
    output_path: Optional[str] = None,
    verbose    : int = 0,
) -> None:
    """Split a (decimal) secret into a share document."""
    _configure_logging(verbose)

    try:
        params     = parameters.parse_scheme(scheme_arg)
        base       = enc_util.parse_base(base_arg)
        secret_int = enc_util.digits2int(secret, 10)
    except ValueError as err:
        raise click.ClickException(str(err))

    assert params.num_shares is not None
    points    = polynom.split(secret_int, params.threshold, params.num_shares)
    share_set = share_store.points2share_set(points, params.threshold, base)

    if output_path is None:
        echo(share_store.dumps(share_set))
    else:
        share_store.dump(share_set, output_path)
        logger.info(f"Wrote {len(points)} shares to {output_path}")


if __name__ == '__main__':
    cli()
