from __future__ import annotations

from typing import Literal

from app.config import StorageKeys
from app.session.observable import Observable
from app.storage import ClientStorage

Theme = Literal["light", "dark"]

_THEMES: tuple[Theme, ...] = ("light", "dark")


class ThemeStore(Observable[Theme]):
    def __init__(self, storage: ClientStorage | None) -> None:
        super().__init__("light")
        self._storage = storage

    def init(self, *, system_prefers_dark: bool = False) -> Theme:
        stored = self._storage.get_item(StorageKeys.THEME) if self._storage else None
        if stored in _THEMES:
            self._set(stored)  # type: ignore[arg-type]
        else:
            self._set("dark" if system_prefers_dark else "light")
        return self.state

    def toggle(self) -> Theme:
        self.set("dark" if self.state == "light" else "light")
        return self.state

    def set(self, theme: Theme) -> None:
        if theme not in _THEMES:
            raise ValueError(f"Unsupported theme: {theme}")
        if self._storage is not None:
            self._storage.set_item(StorageKeys.THEME, theme)
        self._set(theme)
