from __future__ import annotations

import pytest

from tpacpi_bat.errors import UsageError
from tpacpi_bat.methods import METHOD_SPECS, method_tokens, resolve_method
from tpacpi_bat.types import Method


@pytest.mark.parametrize(
    "token, method",
    [
        ("ST", Method.START_THRESHOLD),
        ("start", Method.START_THRESHOLD),
        ("--startThreshold", Method.START_THRESHOLD),
        ("SP", Method.STOP_THRESHOLD),
        ("--stop", Method.STOP_THRESHOLD),
        ("IC", Method.INHIBIT_CHARGE),
        ("--inhibit", Method.INHIBIT_CHARGE),
        ("fd", Method.FORCE_DISCHARGE),
        ("forceDischarge", Method.FORCE_DISCHARGE),
        ("peak", Method.PEAK_SHIFT_STATE),
    ],
)
def test_resolve_method_accepts_codes_and_synonyms(token: str, method: Method) -> None:
    assert resolve_method(token).method is method


def test_synonym_resolves_to_the_same_spec_as_code() -> None:
    assert resolve_method("start") is resolve_method("ST")
    assert resolve_method("--inhibit") is resolve_method("IC")


@pytest.mark.parametrize("token", ["Start", "INHIBIT", "Ic", "-ST", "---ST", "", "bogus"])
def test_resolve_method_rejects_unknown_tokens(token: str) -> None:
    with pytest.raises(UsageError):
        resolve_method(token)


def test_every_set_layout_is_32_bits_wide() -> None:
    for spec in METHOD_SPECS.values():
        assert sum(f.width for f in spec.set_layout) == 32, spec.canonical


def test_every_positional_field_is_in_the_set_layout() -> None:
    for spec in METHOD_SPECS.values():
        names = {f.name for f in spec.set_layout}
        assert set(spec.fields()) <= names


def test_acpi_method_names() -> None:
    names = {m: (s.get_name, s.set_name) for m, s in METHOD_SPECS.items()}
    assert names[Method.START_THRESHOLD] == ("BCTG", "BCCS")
    assert names[Method.STOP_THRESHOLD] == ("BCSG", "BCSS")
    assert names[Method.INHIBIT_CHARGE] == ("PSSG", "BICS")
    assert names[Method.FORCE_DISCHARGE] == ("BDSG", "BDSS")
    assert names[Method.PEAK_SHIFT_STATE][1] == "PSSS"


def test_method_tokens_lists_codes() -> None:
    tokens = method_tokens()
    for code in ("ST", "SP", "IC", "FD", "PS"):
        assert code in tokens
