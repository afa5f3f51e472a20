"""Tests for configuration loading."""

import json

import pytest
from pydantic import ValidationError

from config import Settings, load_config


def test_missing_file_uses_defaults(tmp_path) -> None:
    config = load_config(tmp_path / "missing.json")

    assert config == Settings()
    assert config.dispatch_interval_ms == 5.0
    assert config.motor_mix is None
    assert config.gamepad_button_map["y"] == 3


def test_file_overrides_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"dispatch_interval_ms": 20, "gamepad_deadzone": 0.05, "sampler_capacity": 8})
    )

    config = load_config(path)

    assert config.dispatch_interval_ms == 20
    assert config.gamepad_deadzone == 0.05
    assert config.sampler_capacity == 8
    assert config.serial_baudrate == 115200


def test_dispatch_interval_below_minimum_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(dispatch_interval_ms=1)


def test_motor_mix_shape_is_validated() -> None:
    with pytest.raises(ValidationError):
        Settings(motor_mix=[[1.0, 0.0, 0.0, 0.0, 0.0]])

    mix = [[0.1] * 5 for _ in range(6)]
    assert Settings(motor_mix=mix).motor_mix == mix


def test_invalid_json_propagates(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(path)


def test_negative_response_history_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(response_history=-1)
