import glob
import logging
import os
import re
from subprocess import PIPE, run

from tpacpi_bat.arguments import CallRequest
from tpacpi_bat.codec import NOT_FOUND, decode_get, encode_get, encode_set
from tpacpi_bat.config.config import config as default_config, _Config
from tpacpi_bat.errors import (
    AcpiCallIOError,
    AcpiCallUnavailableError,
    CallFailureError,
    NamespaceResolutionError,
)
from tpacpi_bat.globals import CALL_FAILURE_SENTINEL, DMI_PRODUCT_VERSION_FILE, POWER_SUPPLY_DIR
from tpacpi_bat.prints import print_colon
from tpacpi_bat.types import Mode

SENTINEL_RESPONSE = re.compile(rf"0x0*{CALL_FAILURE_SENTINEL:x}", re.IGNORECASE)
DEVICE_PATH = re.compile(r"\\_SB_*(\.[A-Z0-9_]+)+")


def read_first_line(path: str) -> str | None:
    try:
        with open(path) as f: return f.readline().strip()
    except OSError as e:
        logging.debug("could not read %s: %s", path, e)
        return None


def normalize_device_path(path: str) -> str | None:
    """
    Turn a power supply's firmware path into the HKEY namespace next to it.

    '\\_SB_.PCI0.LPC_.EC__.BAT0' becomes '\\_SB.PCI0.LPC.EC.HKEY'.

    :param path: content of a power supply's device/path attribute
    :return: the ASL base, or None if the path is not a system bus path
    """
    path = path.strip()
    if not DEVICE_PATH.fullmatch(path):
        return None
    segments = [segment.rstrip("_") for segment in path.split(".")]
    if len(segments) < 2 or not all(segments):
        return None
    # the battery or adapter itself, its siblings hold the HKEY device
    segments[-1] = "HKEY"
    return ".".join(segments)


class AcpiCall:
    """Sends requests to the acpi_call interface and reads the replies."""

    def __init__(self, conf: _Config = default_config, verbose: bool = False) -> None:
        self.conf = conf
        self.verbose = verbose
        self.call_file = conf.call_file()
        self._asl_base: str | None = None

    def product_version(self) -> str | None:
        return read_first_line(DMI_PRODUCT_VERSION_FILE)

    def asl_base(self) -> str:
        if self._asl_base is None:
            self._asl_base = self._resolve_asl_base()
            logging.debug("using ASL base %s", self._asl_base)
        return self._asl_base

    def _resolve_asl_base(self) -> str:
        forced = self.conf.forced_asl_base()
        if forced:
            return forced

        product = self.product_version()
        overrides = self.conf.asl_base_overrides()
        if product and product in overrides:
            logging.debug("ASL base override for '%s'", product)
            return overrides[product]

        for path_file in sorted(glob.glob(os.path.join(POWER_SUPPLY_DIR, "*", "device", "path"))):
            device_path = read_first_line(path_file)
            if not device_path:
                continue
            base = normalize_device_path(device_path)
            if base is not None:
                return base
            logging.debug("ignoring unusable device path %r in %s", device_path, path_file)

        raise NamespaceResolutionError(
            "could not determine the ASL base: no override for this platform"
            f" ({product or 'unknown product'}) and no usable power supply device path"
        )

    def _load_module(self) -> None:
        module = self.conf.call_module()
        logging.info("%s missing, loading kernel module %s", self.call_file, module)
        try:
            result = run(["modprobe", module], stdout=PIPE, stderr=PIPE, text=True)
        except OSError as e:
            logging.warning("could not run modprobe: %s", e)
            return
        if result.returncode != 0:
            logging.warning("modprobe %s failed: %s", module, result.stderr.strip())

    def ensure_call_file(self) -> None:
        if os.path.exists(self.call_file):
            return
        if self.conf.load_module():
            self._load_module()
        if not os.path.exists(self.call_file):
            raise AcpiCallUnavailableError(
                f"{self.call_file} does not exist, is the {self.conf.call_module()} kernel module loaded?"
            )

    def call(self, method_name: str, hex_arg: str) -> str:
        """
        Issue one ACPI call and return the raw response line.

        :param method_name: four letter HKEY method, e.g. BCTG
        :param hex_arg: argument word, hex digits without prefix
        :return: the response, stripped
        """
        self.ensure_call_file()
        request = f"{self.asl_base()}.{method_name} 0x{hex_arg}"
        if self.verbose:
            print_colon("Call", request)

        try:
            with open(self.call_file, "w") as f:
                f.write(request)
            with open(self.call_file) as f:
                response = f.readline().strip()
        except OSError as e:
            raise AcpiCallIOError(f"could not access {self.call_file}: {e}") from e

        if self.verbose:
            print_colon("Response", response)

        if SENTINEL_RESPONSE.fullmatch(response):
            raise CallFailureError(response)
        if NOT_FOUND.search(response):
            raise NamespaceResolutionError(f"{request} failed: {response}")
        return response

    def execute(self, request: CallRequest) -> str | None:
        """Perform a parsed request, returning the decoded value for get requests."""
        if request.mode is Mode.GET:
            response = self.call(request.acpi_method, encode_get(request.bat))
            return decode_get(request.spec, response)
        self.call(request.acpi_method, encode_set(request.spec, request.values))
        return None
