"""
Persisted sidebar preferences.

The dashboard keeps two values between sessions: whether the sidebar is
open and which sections are expanded.  They are stored as JSON text
under fixed keys, the way a browser keeps them in local storage.  A
store is handed to the sidebar at construction and written through on
every change.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import MutableMapping, Optional

logger = logging.getLogger(__name__)

SIDEBAR_OPEN_KEY = 'sidebarOpen'
OPEN_SECTIONS_KEY = 'openSections'


@dataclass
class SidebarPreferences:
    sidebar_open: bool = True
    open_sections: dict[str, bool] = field(default_factory=dict)


class PreferenceStore(ABC):
    """Key/value store of JSON encoded strings."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    def _read(self, key: str, default):
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning('Ignoring unreadable preference %s=%r', key, raw)
            return default

    def load(self) -> SidebarPreferences:
        sidebar_open = self._read(SIDEBAR_OPEN_KEY, True)
        open_sections = self._read(OPEN_SECTIONS_KEY, {})
        if not isinstance(open_sections, dict):
            open_sections = {}
        return SidebarPreferences(sidebar_open=bool(sidebar_open), open_sections=dict(open_sections))

    def save(self, prefs: SidebarPreferences) -> None:
        self.set(SIDEBAR_OPEN_KEY, json.dumps(prefs.sidebar_open))
        self.set(OPEN_SECTIONS_KEY, json.dumps(prefs.open_sections))


class MemoryPreferenceStore(PreferenceStore):
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class SessionPreferenceStore(PreferenceStore):
    """Keeps preferences in any mutable mapping, e.g. a Django ``request.session``."""

    def __init__(self, session: MutableMapping):
        self.session = session

    def get(self, key):
        return self.session.get(key)

    def set(self, key, value):
        self.session[key] = value


class JsonFilePreferenceStore(PreferenceStore):
    """Keeps preferences in a small JSON file, one entry per key."""

    def __init__(self, path):
        self.path = Path(path)

    def _load_file(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except ValueError:
            logger.warning('Preference file %s is corrupt; starting empty', self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key):
        return self._load_file().get(key)

    def set(self, key, value):
        data = self._load_file()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding='utf-8')
