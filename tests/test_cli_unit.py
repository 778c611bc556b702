from __future__ import annotations

import pytest
from click.testing import CliRunner

from tpacpi_bat.bin.tpacpi_bat import main


@pytest.fixture
def cli(tmp_path, call_interface):
    config_file = tmp_path / "cli.conf"
    config_file.write_text(
        "[acpi_call]\n"
        f"call_file = {call_interface.path}\n"
        "load_module = false\n"
        "[platform]\n"
        "asl_base = \\_SB.PCI0.LPC.EC.HKEY\n"
    )
    runner = CliRunner()

    def _invoke(*args: str):
        return runner.invoke(main, ["--config", str(config_file), *args])

    return _invoke


def test_get_prints_decoded_value(cli, call_interface):
    call_interface.respond("0x35a")
    result = cli("-g", "stop", "1")
    assert result.exit_code == 0
    assert "90 (relative percent)" in result.output
    assert call_interface.requests == ["\\_SB.PCI0.LPC.EC.HKEY.BCSG 0x1"]


def test_long_synonym_with_dashes_is_a_method(cli, call_interface):
    call_interface.respond("0x1e21")
    result = cli("-g", "--inhibit", "2")
    assert result.exit_code == 0
    assert "yes (30 min)" in result.output
    assert call_interface.requests == ["\\_SB.PCI0.LPC.EC.HKEY.PSSG 0x2"]


def test_verbose_set(cli, call_interface):
    call_interface.respond("0x0")
    result = cli("-v", "-s", "FD", "2", "1", "1")
    assert result.exit_code == 0
    assert "\\_SB.PCI0.LPC.EC.HKEY.BDSS 0x203" in result.output
    assert "Response: 0x0" in result.output


def test_usage_error_prints_help(cli, call_interface):
    result = cli("-g", "PS", "0")
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "peakShiftState" in result.output
    assert call_interface.requests == []


def test_missing_mode_is_a_usage_error(cli):
    result = cli("ST", "1")
    assert result.exit_code == 1
    assert "-g or -s" in result.output


def test_validation_error_prints_usage(cli, call_interface):
    result = cli("-s", "ST", "1", "100")
    assert result.exit_code == 1
    assert "percent" in result.output
    assert "Usage:" in result.output
    assert call_interface.requests == []


def test_call_failure(cli, call_interface):
    call_interface.respond("0x80000000")
    result = cli("-s", "SP", "1", "80")
    assert result.exit_code == 1
    assert "ACPI call failed" in result.output


def test_unsupported_feature(cli, call_interface):
    call_interface.respond("0x50")
    result = cli("-g", "ST", "1")
    assert result.exit_code == 1
    assert "not supported" in result.output


def test_help():
    result = CliRunner().invoke(main, ["-h"])
    assert result.exit_code == 0
    assert "startThreshold" in result.output


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "version" in result.output


def test_wrong_namespace_fails_a_set(cli, call_interface):
    call_interface.respond("Error: AE_NOT_FOUND")
    result = cli("-s", "SP", "1", "80")
    assert result.exit_code == 1
    assert "AE_NOT_FOUND" in result.output
