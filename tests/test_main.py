"""Tests for the command line host (headless paths only)."""

from types import SimpleNamespace

import pytest

import main
from chip8 import load_config
from conftest import assemble


@pytest.fixture
def rom_file(tmp_path):
    path = tmp_path / "draw.ch8"
    path.write_bytes(assemble(0xA000, 0xD015, 0x1204))
    return path


def test_key_map_covers_keypad():
    fake_pygame = SimpleNamespace(**{f"K_{c}": c for c in "1234qwerasdfzxcv"})

    key_map = main.build_key_map(fake_pygame)

    assert sorted(key_map.values()) == list(range(16))
    assert key_map["x"] == 0x0
    assert key_map["v"] == 0xF


def test_run_frame_ticks_once(rom_file):
    interpreter = main.create_interpreter(rom_file, load_config(seed=1))
    interpreter.load(assemble(0x6009, 0xF015, 0x1204))

    main.run_frame(interpreter, 2)
    main.run_frame(interpreter, 10)

    assert interpreter.delay_timer == 8
    assert interpreter.instruction_count == 12


def test_headless_screenshot(rom_file, tmp_path, capsys):
    screenshot = tmp_path / "out.png"

    status = main.main([str(rom_file), "--headless", "--steps", "3", "--scale", "2", "--screenshot", str(screenshot)])

    assert status == 0
    assert screenshot.exists()
    assert "Interpreter(pc=0x0204" in capsys.readouterr().out


def test_headless_missing_rom(tmp_path):
    assert main.main([str(tmp_path / "missing.ch8"), "--headless"]) == 1


def test_headless_reports_bad_opcode(tmp_path):
    path = tmp_path / "bad.ch8"
    path.write_bytes(assemble(0x5121))

    assert main.main([str(path), "--headless", "--steps", "1"]) == 2
