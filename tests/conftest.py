from __future__ import annotations

import builtins
import io
import os

import pytest

from tpacpi_bat import acpi_call
from tpacpi_bat.config.config import _Config


class _RecordedRequest(io.StringIO):
    def __init__(self, sink: list[str]) -> None:
        super().__init__()
        self._sink = sink

    def close(self) -> None:
        if not self.closed:
            self._sink.append(self.getvalue())
        super().close()


class FakeCallInterface:
    """Stands in for /proc/acpi/call: records writes, replays queued responses."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.requests: list[str] = []
        self.responses: list[str] = []

    def respond(self, *responses: str) -> None:
        self.responses.extend(responses)

    def open(self, file, mode="r", *args, **kwargs):
        if os.fspath(file) != self.path:
            return builtins.open(file, mode, *args, **kwargs)
        if "w" in mode:
            return _RecordedRequest(self.requests)
        return io.StringIO(self.responses.pop(0) + "\n")


@pytest.fixture
def make_config(tmp_path):
    """Build a config object from ini text, written to a temporary file."""

    def _make(text: str = "") -> _Config:
        path = tmp_path / "tpacpi-bat.conf"
        path.write_text(text)
        conf = _Config()
        conf.set_path(str(path))
        return conf

    return _make


@pytest.fixture
def call_interface(monkeypatch: pytest.MonkeyPatch, tmp_path) -> FakeCallInterface:
    call_file = tmp_path / "call"
    call_file.touch()
    fake = FakeCallInterface(str(call_file))
    monkeypatch.setattr(acpi_call, "open", fake.open, raising=False)
    return fake


@pytest.fixture
def call_config(make_config, call_interface):
    return make_config(
        "[acpi_call]\n"
        f"call_file = {call_interface.path}\n"
        "load_module = false\n"
        "[platform]\n"
        "asl_base = \\_SB.PCI0.LPC.EC.HKEY\n"
    )
