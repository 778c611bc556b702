import re

from tpacpi_bat.errors import CallFailureError, StatusParseError, UnsupportedFeatureError
from tpacpi_bat.globals import CALL_FAILURE_SENTINEL, INHIBIT_FOREVER, STATUS_WIDTH
from tpacpi_bat.methods import GET_LAYOUT, Field, MethodSpec
from tpacpi_bat.types import Method

HEX_STATUS = re.compile(r"0x[0-9a-f]+", re.IGNORECASE)
NOT_FOUND = re.compile(r"AE_NOT_FOUND|not found", re.IGNORECASE)


def pack(layout: tuple[Field, ...], values: dict[str, int]) -> int:
    """
    Pack named values into a single word, first field at bit 0.

    Reserved fields are zero. A value that does not fit its field is a
    caller bug, validation must have caught it before.

    :param layout: fields in order, least significant first
    :param values: value for every named field of the layout
    :return: the packed word
    """
    word = 0
    offset = 0
    for field in layout:
        if field.name is not None:
            value = values[field.name]
            if value < 0 or value > field.mask:
                raise ValueError(f"{field.name}={value} does not fit in {field.width} bits")
            word |= value << offset
        offset += field.width
    if offset != STATUS_WIDTH:
        raise ValueError(f"layout is {offset} bits wide, expected {STATUS_WIDTH}")
    return word


def unpack(layout: tuple[Field, ...], word: int) -> dict[str, int]:
    values = {}
    offset = 0
    for field in layout:
        if field.name is not None:
            values[field.name] = (word >> offset) & field.mask
        offset += field.width
    return values


def to_hex(word: int) -> str:
    return f"{word:x}"


def encode_set(spec: MethodSpec, values: dict[str, int]) -> str:
    return to_hex(pack(spec.set_layout, values))


def encode_get(bat: int) -> str:
    return to_hex(pack(GET_LAYOUT, {"bat": bat}))


class StatusWord:
    """A 32 bit status returned by the firmware, bit 0 is the least significant."""

    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def parse(cls, response: str) -> "StatusWord":
        text = response.strip()
        if not HEX_STATUS.fullmatch(text):
            diagnostic = text if NOT_FOUND.search(text) else None
            raise StatusParseError(response, diagnostic)
        value = int(text, 16)
        if value == CALL_FAILURE_SENTINEL:
            raise CallFailureError(response)
        if value >> STATUS_WIDTH:
            raise StatusParseError(response, f"wider than {STATUS_WIDTH} bits")
        return cls(value)

    def __getitem__(self, index: int) -> int:
        if not 0 <= index < STATUS_WIDTH:
            raise IndexError(index)
        return (self.value >> index) & 1

    def bits(self, low: int, high: int) -> int:
        """Unsigned value of bits low..high, both inclusive."""
        return (self.value >> low) & ((1 << (high - low + 1)) - 1)

    def __repr__(self) -> str:
        return f"StatusWord(0x{self.value:08x})"


def _check_capability_bits(status: StatusWord, method: Method) -> None:
    if status[8] == 0 and status[9] == 0:
        raise UnsupportedFeatureError(f"{method.value} is not supported on this platform")


def describe_threshold(status: StatusWord, method: Method) -> str:
    _check_capability_bits(status, method)
    value = status.bits(0, 7)
    if value == 0:
        return "0 (default)"
    if 1 <= value <= 99:
        return f"{value} (relative percent)"
    return f"{value} (unknown)"


def describe_inhibit_charge(status: StatusWord) -> str:
    if status[5] != 1:
        raise UnsupportedFeatureError("inhibit charge is not supported on this platform")
    if status[0] != 1:
        return "no"
    minutes = status.bits(8, 23)
    if minutes == 0:
        duration = "unspecified"
    elif minutes == INHIBIT_FOREVER:
        duration = "forever"
    else:
        duration = f"{minutes} min"
    return f"yes ({duration})"


def describe_force_discharge(status: StatusWord) -> str:
    _check_capability_bits(status, Method.FORCE_DISCHARGE)
    text = "yes" if status[0] else "no"
    if status[1]:
        text += " (break on AC detach)"
    return text


def decode_get(spec: MethodSpec, response: str) -> str:
    """Turn the raw response of a get call into the text shown to the user."""
    status = StatusWord.parse(response)
    method = spec.method
    if method in (Method.START_THRESHOLD, Method.STOP_THRESHOLD):
        return describe_threshold(status, method)
    if method is Method.INHIBIT_CHARGE:
        return describe_inhibit_charge(status)
    if method is Method.FORCE_DISCHARGE:
        return describe_force_discharge(status)
    raise ValueError(f"{method.value} has no readable status")
