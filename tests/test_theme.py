import json

import pytest

from theme import ThemeStore


@pytest.fixture
def preference_file(tmp_path):
    return tmp_path / "theme.json"


@pytest.mark.parametrize("prefers_dark", [False, True])
def test_without_saved_choice_the_system_preference_decides(preference_file, prefers_dark):
    store = ThemeStore(str(preference_file), prefers_dark=prefers_dark)

    assert store.saved is None
    assert store.is_dark is prefers_dark


@pytest.mark.parametrize("saved, prefers_dark, expected", [
    ("dark", False, True),
    ("light", True, False),
])
def test_saved_choice_wins(preference_file, saved, prefers_dark, expected):
    preference_file.write_text(json.dumps({"theme": saved}))

    store = ThemeStore(str(preference_file), prefers_dark=prefers_dark)

    assert store.is_dark is expected


def test_toggle_persists(preference_file):
    store = ThemeStore(str(preference_file))

    assert store.toggle() is True
    assert json.loads(preference_file.read_text()) == {"theme": "dark"}
    assert ThemeStore(str(preference_file)).is_dark

    assert store.toggle() is False
    assert ThemeStore(str(preference_file), prefers_dark=True).is_dark is False


@pytest.mark.parametrize("content", ["{not json", json.dumps({"theme": "sepia"}), json.dumps(["dark"])])
def test_bad_preference_file_is_ignored(preference_file, content):
    preference_file.write_text(content)

    store = ThemeStore(str(preference_file), prefers_dark=True)

    assert store.saved is None
    assert store.is_dark


def test_set_dark_creates_missing_directories(tmp_path):
    path = tmp_path / "state" / "theme.json"
    store = ThemeStore(str(path))

    store.set_dark(True)

    assert json.loads(path.read_text()) == {"theme": "dark"}
