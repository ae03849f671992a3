from unittest import mock

from conftest import FakeBus, key_bits
from tm1638board import config, main


def run(monkeypatch, bus, argv, polls=1):
    monkeypatch.setattr(main, "load_config", lambda: dict(config.DEFAULTS))
    monkeypatch.setattr(main, "GpioController", lambda mode: bus)
    sleep = mock.Mock(side_effect=[None] * (polls - 1) + [KeyboardInterrupt])
    monkeypatch.setattr(main.time, "sleep", sleep)
    return main.main(argv)


def test_demo_shows_text_and_keys(monkeypatch, capsys):
    bus = FakeBus(key_bits([0, 0, 0, 0, 0x01, 0, 0, 0]))
    assert run(monkeypatch, bus, ["12.34"], polls=2) == 0

    out = capsys.readouterr().out
    assert "keys: 0x00000000" in out
    assert "keys: 0x00000001" in out
    # dot register written with the dot for "12.34"
    assert [0xCE, 0x04] in bus.frames
    assert bus.pins == {}
    assert bus.cleaned


def test_demo_default_text(monkeypatch):
    bus = FakeBus()
    run(monkeypatch, bus, [])
    assert [0xCE, 0x00] not in bus.frames
