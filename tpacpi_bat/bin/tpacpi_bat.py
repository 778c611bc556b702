#!/usr/bin/env python3
#
# tpacpi-bat - ThinkPad battery charge control through ACPI calls

import logging
import os
import sys

import click

from tpacpi_bat.acpi_call import AcpiCall
from tpacpi_bat.arguments import parse_call
from tpacpi_bat.config.config import config as conf, find_config_file
from tpacpi_bat.errors import TpacpiBatError, UsageError
from tpacpi_bat.globals import GITHUB, VERSION
from tpacpi_bat.prints import print_colon, print_error
from tpacpi_bat.tools import setup_logger
from tpacpi_bat.types import Mode

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], ignore_unknown_options=True)


@click.command(context_settings=CONTEXT_SETTINGS, options_metavar="[-v] -g|-s")
@click.option("-g", "--get", "mode", flag_value=Mode.GET.value, help="Read the current value of METHOD for BAT")
@click.option("-s", "--set", "mode", flag_value=Mode.SET.value, help="Write VALUES of METHOD for BAT")
@click.option("-v", "--verbose", is_flag=True, help="Print the raw ACPI call and its response")
@click.option("--config", is_flag=False, required=False, help="Use config file at defined path")
@click.option("--debug", is_flag=True, help="Show debug logging on stderr")
@click.option("--version", is_flag=True, help="Show currently installed version")
@click.argument("args", nargs=-1, type=click.UNPROCESSED, metavar="METHOD [BAT] [VALUES...]")
def main(mode, verbose, config, debug, version, args):
    """Control ThinkPad battery charging through the acpi_call kernel module.

    \b
    METHOD is one of (synonyms in brackets, an optional leading '--' is accepted):
      ST  start charge threshold   [st, start, startThreshold]
      SP  stop charge threshold    [sp, stop, stopThreshold]
      IC  inhibit charge           [ic, inhibit, inhibitCharge]
      FD  force discharge          [fd, force, forceDischarge]
      PS  peak shift state         [ps, peak, peakShiftState] (set only)

    \b
    BAT is 1 for the main battery, 2 for the secondary one and 0 for either
    or both (set only, not for FD). PS takes no BAT.

    \b
    VALUES for -s:
      ST, SP  PERCENT                 0 (default) or 1-99 (relative percent)
      IC      INHIBIT [MIN]           INHIBIT 0 or 1, MIN 0-720 or 65535 (forever)
      FD      DISCHARGE [ACBREAK]     0 or 1 each, ACBREAK stops on AC detach
      PS      INHIBIT [MIN]           INHIBIT 0 or 1, MIN 0-1440 or 65535 (forever)

    \b
    Example usage:
      tpacpi-bat -g ST 1
      tpacpi-bat -s SP 0 80
      tpacpi-bat -v -s --inhibit 1 1 30
    """
    setup_logger(debug)
    ctx = click.get_current_context()

    if version:
        print_colon("tpacpi-bat", f"version {VERSION}", GITHUB)
        return

    conf.set_path(find_config_file(config))
    if conf.has_config():
        logging.debug("using settings defined in %s", conf.path)

    try:
        request = parse_call(Mode(mode) if mode else None, args)
        if os.geteuid() != 0:
            logging.warning("not running as root, the ACPI call will most likely be refused")
        result = AcpiCall(conf, verbose=verbose).execute(request)
    except UsageError as e:
        print_error(e)
        click.echo(ctx.get_help())
        sys.exit(1)
    except TpacpiBatError as e:
        print_error(e)
        click.echo(ctx.get_usage())
        sys.exit(1)

    if result is not None:
        click.echo(result)


if __name__ == "__main__":
    main()
