# theme.py
"""
Light/dark theme preference.

The saved choice wins; without one, the system preference decides. The
preference file is a small JSON object, e.g. {"theme": "dark"}.
"""
import json
import logging
import os
from typing import Optional

DARK = "dark"
LIGHT = "light"

# --- Data Contracts ---
#
# class ThemeStore:
#   - __init__(self, path: str, prefers_dark: bool = False):
#     - Side Effects: Reads the saved preference, if any.
#   - is_dark -> bool: saved == "dark", or nothing saved and prefers_dark.
#   - toggle(self) -> bool: flips the theme, persists it, returns is_dark.
#   - set_dark(self, dark: bool) -> None: persists an explicit choice.
#   - Invariants: a missing, unreadable or malformed file counts as
#     "nothing saved"; it is never an error.


class ThemeStore:
    """
    Resolves and persists the dark-mode flag.
    """
    def __init__(self, path: str, prefers_dark: bool = False):
        self.path = path
        self.prefers_dark = prefers_dark
        self.saved = self._load()

        logging.info(
            f"Theme resolved to '{DARK if self.is_dark else LIGHT}' "
            f"(saved={self.saved}, prefers_dark={self.prefers_dark})."
        )

    @property
    def is_dark(self) -> bool:
        if self.saved is not None:
            return self.saved == DARK
        return self.prefers_dark

    def toggle(self) -> bool:
        self.set_dark(not self.is_dark)
        return self.is_dark

    def set_dark(self, dark: bool) -> None:
        self.saved = DARK if dark else LIGHT
        self._save()
        logging.info(f"Theme set to '{self.saved}'.")

    def _load(self) -> Optional[str]:
        if not os.path.exists(self.path):
            logging.debug(f"No saved theme preference at {self.path}.")
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"Could not read theme preference from {self.path}: {e}. Ignoring it.")
            return None

        value = data.get('theme') if isinstance(data, dict) else None
        if value not in (DARK, LIGHT):
            logging.warning(f"Unknown theme preference {value!r} in {self.path}. Ignoring it.")
            return None
        return value

    def _save(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'theme': self.saved}, f)
