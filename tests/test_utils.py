import json
import logging
import logging.handlers
from pathlib import Path

import pytest

from constants import DEFAULT_SIMULATION_PARAMETERS, VARIANT_PRESETS
from utils import apply_preset, load_config, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults_fill_missing_parameters():
    resolved = apply_preset({})
    assert resolved["simulation_parameters"] == DEFAULT_SIMULATION_PARAMETERS


def test_preset_overlays_defaults():
    resolved = apply_preset({"preset": "classic"})
    sim = resolved["simulation_parameters"]

    assert sim["heart_scale"] == 200
    assert sim["restore_divisors"] == [2e13, 2e12]
    assert sim["ripples_enabled"] is False
    assert resolved["visualization"]["glow_radius"] == 7
    assert resolved["visualization"]["touch_enabled"] is False


def test_explicit_values_win_over_preset():
    resolved = apply_preset({
        "preset": "classic",
        "simulation_parameters": {"heart_scale": 150},
        "visualization": {"glow_radius": 3},
    })

    assert resolved["simulation_parameters"]["heart_scale"] == 150
    assert resolved["simulation_parameters"]["ripples_enabled"] is False
    assert resolved["visualization"] == {"glow_radius": 3, "touch_enabled": False}


def test_unknown_preset_is_rejected():
    with pytest.raises(ValueError, match="unknown preset"):
        apply_preset({"preset": "sparkly"})


def test_resolved_config_does_not_alias_constants():
    resolved = apply_preset({"preset": "ripple"})
    resolved["simulation_parameters"]["restore_divisors"].append(1.0)

    assert VARIANT_PRESETS["ripple"]["simulation_parameters"]["restore_divisors"] == [20.0, 20.0]
    assert DEFAULT_SIMULATION_PARAMETERS["restore_divisors"] == [20.0, 20.0]


def test_load_config_resolves_preset(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"preset": "touch", "run_control": {"fps": 30}}))

    config = load_config(str(path))

    assert config["run_control"] == {"fps": 30}
    assert config["visualization"]["touch_enabled"] is True
    assert config["simulation_parameters"]["ripples_enabled"] is False


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


def test_shipped_config_loads():
    config = load_config(str(Path(__file__).resolve().parent.parent / "config.json"))
    assert config["simulation_parameters"]["particle_count"] == 1000


def test_setup_logging_adds_console_and_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "heart.log"
    setup_logging({"logging": {"level": "debug", "log_file": str(log_file)}})

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert log_file.exists()


def test_setup_logging_without_file(restore_root_logger):
    setup_logging({"logging": {"log_file": None}})

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert not isinstance(handlers[0], logging.handlers.RotatingFileHandler)
