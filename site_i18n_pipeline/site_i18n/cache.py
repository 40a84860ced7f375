from __future__ import annotations
import json
import logging
import os
from typing import Dict, Iterable, Optional

from .logger import get_logger


class JsonStore:
    """
    One flat {source: translation} JSON file per locale.
    Missing files load as empty; unreadable or malformed files load as empty with a warning.
    """
    def __init__(self, directory: str, filename_template: str, logger: logging.Logger | None = None) -> None:
        self.directory = directory
        self.filename_template = filename_template
        self.logger = logger or get_logger()
        self._data: Dict[str, Dict[str, str]] = {}

    def path_for(self, locale: str) -> str:
        return os.path.join(self.directory, self.filename_template.format(locale=locale))

    def load(self, locale: str) -> Dict[str, str]:
        if locale in self._data:
            return self._data[locale]
        self._data[locale] = self._read(self.path_for(locale))
        return self._data[locale]

    def _read(self, path: str) -> Dict[str, str]:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable translation file {path}: {e}")
            return {}
        if not isinstance(data, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in data.items()):
            self.logger.warning(f"Ignoring {path}: expected a JSON object of string -> string")
            return {}
        return data

    def has(self, locale: str, key: str) -> bool:
        return key in self.load(locale)

    def get(self, locale: str, key: str) -> Optional[str]:
        return self.load(locale).get(key)


class TranslationCache(JsonStore):
    def __init__(self, cache_dir: str, logger: logging.Logger | None = None) -> None:
        super().__init__(cache_dir, "{locale}.json", logger)

    def set(self, locale: str, key: str, value: str) -> bool:
        """Add a translation. An existing entry is never replaced; returns False in that case."""
        data = self.load(locale)
        if key in data:
            return False
        data[key] = value
        return True

    def forget(self, locale: str, keys: Iterable[str]) -> int:
        data = self.load(locale)
        removed = 0
        for k in keys:
            if data.pop(k, None) is not None:
                removed += 1
        return removed

    def save(self, locale: str, mapping: Dict[str, str] | None = None) -> str:
        if mapping is not None:
            self._data[locale] = dict(mapping)
        path = self.path_for(locale)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            json.dump(self.load(locale), f, ensure_ascii=False, indent=2)
            f.write("\n")
        return path


class OverrideStore(JsonStore):
    # Authored by hand, read-only during a build
    def __init__(self, override_dir: str, logger: logging.Logger | None = None) -> None:
        super().__init__(override_dir, "overrides.{locale}.json", logger)
