import json

import pytest

from scalka.settings import (
    AngleUnit,
    Settings,
    default_config_path,
    load_settings,
    save_settings,
)


def test_missing_file_gives_defaults_and_creates_it(tmp_path):
    path = tmp_path / "conf" / "calc.json"
    settings = load_settings(path)
    assert settings.angle_unit is AngleUnit.DEGREES
    assert settings.fmt == "%1.15lg"
    assert settings.auto_recalc is True
    assert path.exists()
    assert load_settings(path) == settings


def test_round_trip(tmp_path):
    path = tmp_path / "calc.json"
    original = Settings(angle_unit=AngleUnit.GRADS, fmt="%.3f", auto_recalc=False)
    save_settings(original, path)
    assert load_settings(path) == original


def test_registers_are_not_persisted(tmp_path):
    path = tmp_path / "calc.json"
    save_settings(Settings(x=3.25, y=-1.5), path)
    loaded = load_settings(path)
    assert (loaded.x, loaded.y) == (0.0, 0.0)


def test_corrupt_file_is_replaced_with_defaults(tmp_path):
    path = tmp_path / "calc.json"
    path.write_text("not json at all", encoding="utf-8")
    settings = load_settings(path)
    assert settings == Settings()
    assert json.loads(path.read_text(encoding="utf-8"))["fmt"] == Settings().fmt


def test_invalid_values_fall_back(tmp_path):
    path = tmp_path / "calc.json"
    path.write_text(json.dumps({"angle": 7, "fmt": "%g", "realtime": True}), encoding="utf-8")
    assert load_settings(path) == Settings()


def test_format_length_is_limited():
    with pytest.raises(ValueError):
        Settings(fmt="")
    with pytest.raises(ValueError):
        Settings(fmt="%" * 16)


def test_angle_unit_is_validated():
    assert Settings(angle_unit=1).angle_unit is AngleUnit.RADIANS
    with pytest.raises(ValueError):
        Settings(angle_unit=3)


def test_angle_unit_labels(tmp_path):
    path = tmp_path / "calc.json"
    labels = []
    for unit in AngleUnit:
        save_settings(Settings(angle_unit=unit), path)
        labels.append(load_settings(path).angle_unit.label)
    assert labels == ["Degrees", "Radians", "Grads"]


def test_default_path_follows_config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    path = default_config_path()
    assert path.parent == tmp_path / "scalka"
    assert load_settings() == Settings()
    assert path.exists()