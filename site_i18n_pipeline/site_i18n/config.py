# site_i18n/config.py
from __future__ import annotations
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Set

import yaml

from .errors import ConfigError

DEEPL_FREE_ENDPOINT = "https://api-free.deepl.com/v2/translate"

@dataclass
class ExtractionHints:
    # Text whose parent element is one of these is never translated
    skip_tags: Set[str] = field(default_factory=lambda: {
        "script", "style", "noscript", "code", "pre", "textarea", "svg", "math"
    })
    # Attributes translated wherever they appear, regardless of element
    attributes: List[str] = field(default_factory=lambda: [
        "alt", "title", "placeholder", "aria-label", "value"
    ])

@dataclass
class MinifyOptions:
    collapse_whitespace: bool = True
    remove_comments: bool = True
    minify_css: bool = True
    minify_js: bool = True

    @property
    def enabled(self) -> bool:
        return self.collapse_whitespace or self.remove_comments or self.minify_css or self.minify_js

@dataclass
class BuildConfig:
    src_dir: str = "new-main"
    dist_dir: str = "dist"
    cache_dir: str = ".i18n-cache"
    i18n_dir: str = "i18n"

    default_locale: str = "pt"
    target_locales: List[str] = field(default_factory=lambda: ["en", "es"])
    site_origin: str = "https://www.example.com"
    minify: MinifyOptions = field(default_factory=MinifyOptions)

    provider_endpoint: str = DEEPL_FREE_ENDPOINT
    source_lang: Optional[str] = None
    # locale -> provider language code, e.g. {"en": "EN-GB"}
    provider_locales: Dict[str, str] = field(default_factory=dict)
    batch_size: int = 40
    timeout: float = 60.0
    qps: float = 0.0
    workers: int = 4
    switcher_id: str = "lang-switcher"
    corrections_path: Optional[str] = None
    length_ratio_min: float = 0.3
    length_ratio_max: float = 3.0
    log_level: str = "INFO"
    dry_run: bool = False

    @property
    def locales(self) -> List[str]:
        return [self.default_locale] + list(self.target_locales)

    def validate(self) -> "BuildConfig":
        if not self.default_locale:
            raise ConfigError("default_locale must not be empty")
        if not self.target_locales:
            raise ConfigError("at least one target locale is required")
        if self.default_locale in self.target_locales:
            raise ConfigError(f"default locale {self.default_locale!r} cannot also be a target locale")
        if len(set(self.target_locales)) != len(self.target_locales):
            raise ConfigError(f"duplicate target locales: {self.target_locales}")
        if self.batch_size < 1:
            raise ConfigError("batch_size must be >= 1")
        if self.workers < 1:
            raise ConfigError("workers must be >= 1")
        self.site_origin = self.site_origin.rstrip("/")
        return self

PATH_KEYS = ("src_dir", "dist_dir", "cache_dir", "i18n_dir", "corrections_path")

def config_from_mapping(data: Dict[str, Any], base_dir: str = ".") -> BuildConfig:
    known = {f.name for f in fields(BuildConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    values = dict(data)
    if "minify" in values:
        m = values["minify"]
        if isinstance(m, bool):
            values["minify"] = MinifyOptions(m, m, m, m)
        elif isinstance(m, dict):
            try:
                values["minify"] = MinifyOptions(**m)
            except TypeError as e:
                raise ConfigError(f"Bad minify options: {e}") from e
        else:
            raise ConfigError("minify must be a mapping or a boolean")
    if isinstance(values.get("target_locales"), str):
        values["target_locales"] = [values["target_locales"]]
    for k in PATH_KEYS:
        if values.get(k):
            values[k] = os.path.normpath(os.path.join(base_dir, str(values[k])))
    return BuildConfig(**values)

def load_config(path: str) -> BuildConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a mapping at the top level")
    return config_from_mapping(data, base_dir=os.path.dirname(os.path.abspath(path)))
