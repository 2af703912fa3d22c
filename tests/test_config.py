"""
Tests for nesting configuration loading.

Run: pytest tests/test_config.py
"""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from config import settings
from core.exceptions import ConfigFileError
from nesting.config import (
    load_config, save_config, create_nesting_config_from_config,
    create_machine_config_from_config, DEFAULT_CONFIG_PATH
)
from nesting.models import NestingConfig, FreeRectSplit


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    monkeypatch.setattr(settings, "NESTING_CONFIG_PATH", "")
    monkeypatch.setattr(settings, "NESTING_GENETIC_SEED", None)


def test_packaged_default_matches_dataclass_defaults():
    assert DEFAULT_CONFIG_PATH.exists()
    config = create_nesting_config_from_config()
    assert config == NestingConfig()


def test_load_config_keys():
    data = load_config()
    assert set(data) >= {"machine_profile", "genetic", "sheet_selection", "free_rect_split"}


def test_values_from_dict():
    config = create_nesting_config_from_config({
        "machine_profile": {"kerf_width_mm": 0.15, "cut_rate_mm_min": 4500},
        "genetic": {"population_size": 20, "workers": 2},
        "sheet_selection": {"standard_sheets": [{"width": 1250, "length": 2500}]},
        "free_rect_split": "REMOVE_OVERLAPPING",
    })

    assert config.machine.kerf_width_mm == 0.15
    assert config.machine.cut_rate_mm_min == 4500
    assert config.machine.part_spacing_mm == 3.0
    assert config.genetic.population_size == 20
    assert config.genetic.workers == 2
    assert config.selector.standard_sheets == [(1250.0, 2500.0)]
    assert config.free_rect_split == FreeRectSplit.REMOVE_OVERLAPPING


def test_empty_dict_gives_defaults():
    assert create_nesting_config_from_config({}) == NestingConfig()


def test_invalid_split_mode():
    with pytest.raises(ConfigFileError):
        create_nesting_config_from_config({"free_rect_split": "GUESS"})


def test_env_seed_override(monkeypatch):
    monkeypatch.setattr(settings, "NESTING_GENETIC_SEED", 7)
    assert create_nesting_config_from_config({}).genetic.seed == 7


def test_config_path_from_settings(monkeypatch, tmp_path):
    path = tmp_path / "machine.json"
    path.write_text(json.dumps({"machine_profile": {"kerf_width_mm": 0.5}}), encoding="utf-8")
    monkeypatch.setattr(settings, "NESTING_CONFIG_PATH", str(path))

    assert create_machine_config_from_config().kerf_width_mm == 0.5


def test_missing_file(tmp_path):
    with pytest.raises(ConfigFileError) as exc_info:
        load_config(str(tmp_path / "missing.json"))
    assert exc_info.value.code == "CONFIG_FILE_ERROR"


def test_malformed_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigFileError):
        load_config(str(path))


def test_save_and_reload(tmp_path):
    path = tmp_path / "saved.json"
    config = NestingConfig()
    config.genetic.generations = 12
    save_config(config.to_dict(), str(path))

    assert create_nesting_config_from_config(load_config(str(path))).genetic.generations == 12


def test_validate_config():
    assert settings.validate_config() is True
