import json

import pytest

from services.theme_store import ThemeStore


def test_defaults_to_light(tmp_path):
    assert ThemeStore(tmp_path / "theme.json").load() == "light"


def test_switch_persists(tmp_path):
    path = tmp_path / "nested" / "theme.json"
    store = ThemeStore(path)

    assert store.switch("light") == "dark"
    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}
    assert ThemeStore(path).load() == "dark"
    assert store.switch("dark") == "light"
    assert store.load() == "light"


def test_switch_follows_current_not_file(tmp_path):
    path = tmp_path / "theme.json"
    store = ThemeStore(path)
    store.save("dark")
    assert store.switch("dark") == "light"
    assert store.switch("dark") == "light"


def test_switch_survives_unwritable_location(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    store = ThemeStore(blocker / "theme.json")

    assert store.switch("light") == "dark"
    assert store.load() == "light"


def test_garbage_file_falls_back_to_light(tmp_path):
    path = tmp_path / "theme.json"
    path.write_text("{not json", encoding="utf-8")
    assert ThemeStore(path).load() == "light"
    path.write_text('{"theme": "solarized"}', encoding="utf-8")
    assert ThemeStore(path).load() == "light"


def test_save_rejects_unknown_theme(tmp_path):
    with pytest.raises(ValueError):
        ThemeStore(tmp_path / "theme.json").save("solarized")
