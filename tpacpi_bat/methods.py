from dataclasses import dataclass

from tpacpi_bat.errors import UsageError
from tpacpi_bat.types import Method


@dataclass(frozen=True)
class Field:
    """A named run of bits inside the 32 bit ACPI argument word.

    Fields whose name is None are reserved and always encoded as zero.
    """

    name: str | None
    width: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1


def reserved(width: int) -> Field:
    return Field(None, width)


@dataclass(frozen=True)
class MethodSpec:
    method: Method
    synonyms: tuple[str, ...]
    get_name: str
    set_name: str
    set_layout: tuple[Field, ...]
    # positional values after <bat>, required ones first
    required: tuple[str, ...]
    optional: tuple[str, ...] = ()
    get_allowed: bool = True
    bat_zero_get: bool = False
    bat_zero_set: bool = True
    takes_bat: bool = True

    @property
    def canonical(self) -> str:
        return self.method.value

    def fields(self) -> tuple[str, ...]:
        return self.required + self.optional


# every get call sends only the battery selector
GET_LAYOUT: tuple[Field, ...] = (Field("bat", 2), reserved(30))

THRESHOLD_LAYOUT = (Field("percent", 8), Field("bat", 2), reserved(22))

METHOD_SPECS: dict[Method, MethodSpec] = {
    Method.START_THRESHOLD: MethodSpec(
        method=Method.START_THRESHOLD,
        synonyms=("st", "start", "startThreshold"),
        get_name="BCTG",
        set_name="BCCS",
        set_layout=THRESHOLD_LAYOUT,
        required=("percent",),
    ),
    Method.STOP_THRESHOLD: MethodSpec(
        method=Method.STOP_THRESHOLD,
        synonyms=("sp", "stop", "stopThreshold"),
        get_name="BCSG",
        set_name="BCSS",
        set_layout=THRESHOLD_LAYOUT,
        required=("percent",),
    ),
    Method.INHIBIT_CHARGE: MethodSpec(
        method=Method.INHIBIT_CHARGE,
        synonyms=("ic", "inhibit", "inhibitCharge"),
        # charge inhibition is read back through the peak shift state
        get_name="PSSG",
        set_name="BICS",
        set_layout=(
            Field("inhibit", 1),
            reserved(3),
            Field("bat", 2),
            reserved(2),
            Field("min", 16),
            reserved(8),
        ),
        required=("inhibit",),
        optional=("min",),
    ),
    Method.FORCE_DISCHARGE: MethodSpec(
        method=Method.FORCE_DISCHARGE,
        synonyms=("fd", "force", "forceDischarge"),
        get_name="BDSG",
        set_name="BDSS",
        set_layout=(
            Field("discharge", 1),
            Field("acbreak", 1),
            reserved(6),
            Field("bat", 2),
            reserved(22),
        ),
        required=("discharge",),
        optional=("acbreak",),
        bat_zero_set=False,
    ),
    Method.PEAK_SHIFT_STATE: MethodSpec(
        method=Method.PEAK_SHIFT_STATE,
        synonyms=("ps", "peak", "peakShiftState"),
        get_name="PSSG",
        set_name="PSSS",
        set_layout=(
            Field("inhibit", 1),
            reserved(3),
            reserved(4),
            Field("min", 16),
            reserved(8),
        ),
        required=("inhibit",),
        optional=("min",),
        get_allowed=False,
        takes_bat=False,
    ),
}

_TOKENS: dict[str, Method] = {}
for _spec in METHOD_SPECS.values():
    for _token in (_spec.canonical,) + _spec.synonyms:
        _TOKENS[_token] = _spec.method


def resolve_method(token: str) -> MethodSpec:
    """Look up a method by canonical code or synonym, optionally prefixed by '--'.

    Matching is case-sensitive.
    """
    name = token[2:] if token.startswith("--") else token
    if name not in _TOKENS:
        raise UsageError(f"unknown method '{token}'")
    return METHOD_SPECS[_TOKENS[name]]


def method_tokens() -> list[str]:
    return sorted(_TOKENS)
