from __future__ import annotations

import json
from pathlib import Path

import pytest

from tea_cipher.buffer import encrypt_bytes
from tea_cipher.main import main

KEY_HEX = "000102030405060708090a0b0c0d0e0f"


def test_encrypt_then_decrypt(capsys: pytest.CaptureFixture[str]) -> None:
    plain_hex = "00112233445566778899aabbccddeeff"

    assert main(["encrypt", "--data", plain_hex, "--key", KEY_HEX]) == 0
    ct_hex = capsys.readouterr().out.strip()
    assert bytes.fromhex(ct_hex) == encrypt_bytes(bytes.fromhex(plain_hex), bytes.fromhex(KEY_HEX))

    assert main(["decrypt", "--data", ct_hex, "--key", KEY_HEX]) == 0
    assert capsys.readouterr().out.strip() == plain_hex


def test_zero_vector(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 8, "--key", "00" * 16, "--byteorder", "big"]) == 0
    assert capsys.readouterr().out.strip() == "41ea3a0a94baa940"


def test_key_and_options_from_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "cipher.json"
    config_path.write_text(
        json.dumps({"use_tea": False, "rounds": 16, "key_hex": KEY_HEX}),
        encoding="utf-8",
    )

    assert main(["encrypt", "--data", "00" * 8, "--config", str(config_path)]) == 0
    expected = encrypt_bytes(bytes(8), bytes.fromhex(KEY_HEX), 16, variant="xtea")
    assert capsys.readouterr().out.strip() == expected.hex()


def test_flags_override_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "cipher.json"
    config_path.write_text(json.dumps({"use_tea": False, "key_hex": KEY_HEX}), encoding="utf-8")

    argv = ["encrypt", "--data", "00" * 8, "--config", str(config_path), "--variant", "tea", "--rounds", "8"]
    assert main(argv) == 0
    expected = encrypt_bytes(bytes(8), bytes.fromhex(KEY_HEX), 8, variant="tea")
    assert capsys.readouterr().out.strip() == expected.hex()


def test_misaligned_input_is_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 9, "--key", KEY_HEX]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "input error" in captured.err
    assert "multiple of 8" in captured.err


def test_allow_overrun_extends_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 9, "--key", KEY_HEX, "--allow-overrun"]) == 0
    ct_hex = capsys.readouterr().out.strip()
    assert bytes.fromhex(ct_hex) == encrypt_bytes(bytes(16), bytes.fromhex(KEY_HEX))


def test_missing_key(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 8]) == 2
    assert "no key" in capsys.readouterr().err


def test_bad_key_hex(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 8, "--key", "abcd"]) == 2
    assert "--key must be exactly 32 hex characters" in capsys.readouterr().err


def test_bad_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 8, "--config", str(tmp_path / "missing.json")]) == 2
    assert "config error" in capsys.readouterr().err


def test_negative_rounds(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 8, "--key", KEY_HEX, "--rounds", "-1"]) == 2
    assert "round count" in capsys.readouterr().err


def test_debug_log_goes_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["encrypt", "--data", "00" * 16, "--key", KEY_HEX, "--log-level", "debug"]) == 0
    captured = capsys.readouterr()
    assert "variant=tea" in captured.err
    assert "blocks=2" in captured.err
    assert len(captured.out.strip()) == 32
