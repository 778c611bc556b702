from dataclasses import dataclass, field
import logging
import re

from tpacpi_bat.errors import UsageError, ValidationError
from tpacpi_bat.globals import INHIBIT_FOREVER, MAX_INHIBIT_MINUTES
from tpacpi_bat.methods import MethodSpec, resolve_method
from tpacpi_bat.types import BatterySelector, Method, Mode

INTEGER = re.compile(r"[0-9]+")


@dataclass
class CallRequest:
    spec: MethodSpec
    mode: Mode
    bat: int
    values: dict[str, int] = field(default_factory=dict)

    @property
    def acpi_method(self) -> str:
        return self.spec.get_name if self.mode is Mode.GET else self.spec.set_name


def parse_int(name: str, token: str) -> int:
    if not INTEGER.fullmatch(token):
        raise ValidationError(name, f"'{token}' is not a non-negative integer")
    return int(token)


def _check_choice(name: str, value: int, choices: tuple[int, ...]) -> int:
    if value not in choices:
        raise ValidationError(name, f"{value} must be one of {', '.join(map(str, choices))}")
    return value


def _check_percent(value: int) -> int:
    if not 0 <= value <= 99:
        raise ValidationError("percent", f"{value} is not between 0 and 99")
    return value


def _check_minutes(value: int, method: Method) -> int:
    if value == INHIBIT_FOREVER:
        return value
    # the inhibit charge call counts half minutes, peak shift state whole minutes
    scale = 2 if method is Method.INHIBIT_CHARGE else 1
    limit = MAX_INHIBIT_MINUTES // scale
    if value > limit:
        raise ValidationError("min", f"{value} must be at most {limit} or exactly {INHIBIT_FOREVER}")
    return value * scale


def validate_value(name: str, value: int, method: Method) -> int:
    if name == "percent":
        return _check_percent(value)
    if name == "min":
        return _check_minutes(value, method)
    if name in ("inhibit", "discharge", "acbreak"):
        return _check_choice(name, value, (0, 1))
    raise UsageError(f"unknown field '{name}'")


def parse_bat(token: str, spec: MethodSpec, mode: Mode) -> int:
    bat = parse_int("bat", token)
    _check_choice("bat", bat, tuple(b.value for b in BatterySelector))
    zero_allowed = spec.bat_zero_get if mode is Mode.GET else spec.bat_zero_set
    if bat == BatterySelector.ANY.value and not zero_allowed:
        raise ValidationError("bat", f"0 (either battery) is not allowed for {mode.value} {spec.canonical}")
    return bat


def parse_call(mode: Mode | None, tokens: list[str] | tuple[str, ...]) -> CallRequest:
    """
    Build a validated request from the positional command line arguments.

    :param mode: Mode.GET or Mode.SET, None if neither -g nor -s was given
    :param tokens: method token followed by battery and field values
    :return: the request, ready to be encoded
    """
    if mode is None:
        raise UsageError("one of -g or -s is required")
    tokens = list(tokens)
    if not tokens:
        raise UsageError("missing method")
    spec = resolve_method(tokens.pop(0))

    if mode is Mode.GET and not spec.get_allowed:
        raise UsageError(f"{spec.canonical} cannot be read")

    if spec.takes_bat:
        if not tokens:
            raise UsageError(f"missing battery for {spec.canonical}")
        bat = parse_bat(tokens.pop(0), spec, mode)
    else:
        bat = BatterySelector.ANY.value

    request = CallRequest(spec=spec, mode=mode, bat=bat)
    if mode is Mode.GET:
        if tokens:
            raise UsageError(f"unexpected arguments: {' '.join(tokens)}")
        return request

    if len(tokens) < len(spec.required):
        raise UsageError(f"{spec.canonical} needs: {' '.join(spec.required)}")
    if len(tokens) > len(spec.fields()):
        extra = tokens[len(spec.fields()):]
        raise UsageError(f"unexpected arguments: {' '.join(extra)}")

    for name in spec.fields():
        raw = parse_int(name, tokens.pop(0)) if tokens else 0
        request.values[name] = validate_value(name, raw, spec.method)
    if "bat" in {f.name for f in spec.set_layout}:
        request.values["bat"] = bat

    logging.debug("parsed %s %s bat=%d %s", mode.value, spec.canonical, bat, request.values)
    return request
