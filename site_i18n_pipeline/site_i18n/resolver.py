from __future__ import annotations
from typing import Optional

from .cache import OverrideStore, TranslationCache


class LocaleResolver:
    """
    override -> cache -> source string unchanged.

    Read-only over both stores; an unresolved string silently falls back to the source text.
    """
    def __init__(self, cache: TranslationCache, overrides: OverrideStore, default_locale: Optional[str] = None) -> None:
        self.cache = cache
        self.overrides = overrides
        self.default_locale = default_locale

    def resolve(self, locale: str, source: str) -> str:
        if locale == self.default_locale:
            return source
        ov = self.overrides.get(locale, source)
        if ov:
            return ov
        cached = self.cache.get(locale, source)
        if cached is not None:
            return cached
        return source
