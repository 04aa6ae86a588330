from __future__ import annotations

import json

import pytest

from app.auth.tokens import AuthTokenStore
from app.session.theme import ThemeStore
from app.storage import ClientStorage, FileStorage, MemoryStorage


def test_storages_satisfy_protocol(tmp_path) -> None:
    assert isinstance(MemoryStorage(), ClientStorage)
    assert isinstance(FileStorage(tmp_path / "storage.json"), ClientStorage)


def test_file_storage_persists_between_instances(tmp_path) -> None:
    path = tmp_path / "nested" / "storage.json"
    first = FileStorage(path)
    first.set_item("auth_token", "abc")
    first.set_item("theme", "dark")
    first.remove_item("theme")
    first.remove_item("missing")

    second = FileStorage(path)

    assert second.get_item("auth_token") == "abc"
    assert second.get_item("theme") is None
    assert json.loads(path.read_text(encoding="utf-8")) == {"auth_token": "abc"}


@pytest.mark.parametrize("content", ["not json", "[1, 2]"])
def test_file_storage_ignores_unusable_file(tmp_path, content: str) -> None:
    path = tmp_path / "storage.json"
    path.write_text(content, encoding="utf-8")

    storage = FileStorage(path)

    assert storage.get_item("auth_token") is None
    storage.set_item("auth_token", "fresh")
    assert FileStorage(path).get_item("auth_token") == "fresh"


def test_theme_defaults_to_system_preference() -> None:
    assert ThemeStore(MemoryStorage()).init() == "light"
    assert ThemeStore(MemoryStorage()).init(system_prefers_dark=True) == "dark"


def test_theme_stored_preference_wins() -> None:
    storage = MemoryStorage({"theme": "dark"})

    assert ThemeStore(storage).init(system_prefers_dark=False) == "dark"


def test_theme_toggle_persists_and_notifies() -> None:
    storage = MemoryStorage()
    theme = ThemeStore(storage)
    seen: list[str] = []
    theme.subscribe(seen.append)

    theme.toggle()
    theme.toggle()

    assert seen == ["light", "dark", "light"]
    assert storage.get_item("theme") == "light"


def test_theme_rejects_unknown_value() -> None:
    theme = ThemeStore(None)

    with pytest.raises(ValueError):
        theme.set("sepia")  # type: ignore[arg-type]
    assert theme.state == "light"


def test_file_storage_sees_writes_from_another_instance(tmp_path) -> None:
    path = tmp_path / "storage.json"
    reader = AuthTokenStore(FileStorage(path))
    writer = AuthTokenStore(FileStorage(path))
    assert reader.get_token() is None

    writer.store("fresh-token", "r")
    assert reader.get_token() == "fresh-token"
    assert reader.has_valid_token() is True

    writer.clear()
    assert reader.get_token() is None
