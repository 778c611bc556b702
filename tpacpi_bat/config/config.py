from configparser import ConfigParser, Error as ConfigParserError
import logging
import os
from subprocess import run, PIPE
import sys

from tpacpi_bat.globals import (
    ACPI_CALL_FILE,
    ACPI_CALL_MODULE,
    ASL_BASE_OVERRIDES,
    SYSTEM_CONFIG_FILE,
)
from tpacpi_bat.prints import print_error


def find_config_file(args_config_file) -> str | None:
    """
    Find the config file to use.

    Look for a config file in the following priorization order:
    1. Command line argument
    2. User config file
    3. System config file

    :param args_config_file: Path to the config file provided as a command line argument
    :return: The path to the config file to use, None if there is none
    """
    if args_config_file is not None:                                # (1) Command line argument was specified
        if os.path.isfile(args_config_file): return args_config_file
        print_error(f"config file specified with '--config {args_config_file}' not found")
        sys.exit(1)

    # use $SUDO_USER or $USER to get home dir since sudo can't access
    # user env vars
    home = run(["getent passwd ${SUDO_USER:-$USER} | cut -d: -f6"],
        shell=True,
        stdout=PIPE,
        universal_newlines=True
    ).stdout.rstrip()
    user_config_dir = os.getenv("XDG_CONFIG_HOME", default=os.path.join(home, ".config"))
    user_config_file = os.path.join(user_config_dir, "tpacpi-bat/tpacpi-bat.conf")

    if os.path.isfile(user_config_file): return user_config_file    # (2) User config file
    if os.path.isfile(SYSTEM_CONFIG_FILE): return SYSTEM_CONFIG_FILE  # (3) System config file
    return None


class _Config:
    def __init__(self) -> None:
        self.path: str | None = None
        self._config: ConfigParser = self._new_parser()

    @staticmethod
    def _new_parser() -> ConfigParser:
        parser = ConfigParser()
        # product names are case sensitive keys
        parser.optionxform = str
        return parser

    def set_path(self, path: str | None) -> None:
        self.path = path
        if self.has_config(): self.update_config()
        else: self._config = self._new_parser()

    def has_config(self) -> bool:
        return self.path is not None and os.path.isfile(self.path)

    def get_config(self) -> ConfigParser:
        return self._config

    def update_config(self) -> None:
        # create new ConfigParser to prevent old data from remaining
        self._config = self._new_parser()
        try: self._config.read(self.path)
        except ConfigParserError as e:
            logging.warning("the following error occured while parsing %s, using defaults: %s", self.path, e)
            self._config = self._new_parser()

    def call_file(self) -> str:
        return self._config.get("acpi_call", "call_file", fallback=ACPI_CALL_FILE)

    def call_module(self) -> str:
        return self._config.get("acpi_call", "module", fallback=ACPI_CALL_MODULE)

    def load_module(self) -> bool:
        try: return self._config.getboolean("acpi_call", "load_module", fallback=True)
        except ValueError:
            logging.warning("invalid value for [acpi_call] load_module, assuming true")
            return True

    def forced_asl_base(self) -> str | None:
        return self._config.get("platform", "asl_base", fallback=None)

    def asl_base_overrides(self) -> dict[str, str]:
        overrides = dict(ASL_BASE_OVERRIDES)
        if self._config.has_section("asl_bases"):
            overrides.update(self._config.items("asl_bases"))
        return overrides


config = _Config()
