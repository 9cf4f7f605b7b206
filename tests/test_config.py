import json

import pytest

from gpl2ase.core.config import DEFAULT_CONFIG, Config, get_config
from gpl2ase.core.paths import Paths


def test_defaults(tmp_path):
    config = Config(str(tmp_path / "config.json"))

    assert config.palette_capacity == 2048
    assert config.capacity_limit == 2048
    assert config.overwrite_existing is True
    assert config.generate_preview is False
    assert config.record_history is True
    assert config.debug_mode is False


def test_missing_file_uses_defaults(tmp_path):
    config = Config(str(tmp_path / "missing.json"))

    assert config.load() is False
    assert config.data == DEFAULT_CONFIG


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    config = Config(str(path))
    config.palette_capacity = 4096
    config.generate_preview = True
    assert config.modified

    assert config.save() is True
    assert not config.modified

    reloaded = Config(str(path))
    assert reloaded.load() is True
    assert reloaded.palette_capacity == 4096
    assert reloaded.generate_preview is True


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"palette_capacity": 16, "quickbms_path": "x"}), encoding="utf-8")

    config = Config(str(path))
    config.load()

    assert config.palette_capacity == 16
    assert "quickbms_path" not in config.data


def test_invalid_json_keeps_defaults(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    config = Config(str(path))

    assert config.load() is False
    assert config.data == DEFAULT_CONFIG
    assert "[ERROR]" in capsys.readouterr().out


def test_invalid_value_keeps_default(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"palette_capacity": -3, "debug_mode": "yes"}), encoding="utf-8")

    config = Config(str(path))
    config.load()

    assert config.palette_capacity == 2048
    assert config.debug_mode is False
    assert capsys.readouterr().out.count("[WARN]") == 2


def test_zero_capacity_means_unlimited(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    config.palette_capacity = 0

    assert config.capacity_limit is None


def test_setters_validate(tmp_path):
    config = Config(str(tmp_path / "config.json"))

    with pytest.raises(ValueError):
        config.palette_capacity = -1
    with pytest.raises(TypeError):
        config["generate_preview"] = "sure"

    config.preview_cell_size = 1000
    assert config.preview_cell_size == 128


def test_database_path_defaults_to_user_data_dir(tmp_path):
    config = Config(str(tmp_path / "config.json"))

    assert config.database_path == Paths.get_database_path()

    config.database_path = str(tmp_path / "mine.db")
    assert config.database_path == str(tmp_path / "mine.db")


def test_global_config_uses_user_data_dir(isolated_user_data):
    config = get_config()

    assert config.config_path == str(isolated_user_data / "config.json")
    assert get_config() is config


def test_copy_is_independent(tmp_path):
    config = Config(str(tmp_path / "config.json"))

    clone = config.copy()
    clone.palette_capacity = 16
    clone.record_history = False

    assert clone.config_path == config.config_path
    assert config.palette_capacity == DEFAULT_CONFIG["palette_capacity"]
    assert config.record_history is True
