from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from .errors import ConfigError

@dataclass
class CorrectionRule:
    pattern: str
    replacement: str
    ignore_case: bool = True
    regex: re.Pattern = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            self.regex = re.compile(self.pattern, re.IGNORECASE if self.ignore_case else 0)
        except re.error as e:
            raise ConfigError(f"Invalid correction pattern {self.pattern!r}: {e}") from e

    def apply(self, text: str) -> str:
        return self.regex.sub(self.replacement, text)

@dataclass
class CorrectionTable:
    """
    Ordered per-locale find/replace rules for recurring machine-translation defects.

    `text` rules run on every resolved string while rendering; `document` rules run on
    the serialized page, where words split across adjacent elements have become flat text.
    """
    text: Dict[str, List[CorrectionRule]] = field(default_factory=dict)
    document: Dict[str, List[CorrectionRule]] = field(default_factory=dict)

    def fix_text(self, locale: str, text: str) -> str:
        if not text:
            return text
        for rule in self.text.get(locale, []):
            text = rule.apply(text)
        return text

    def fix_document(self, locale: str, html: str) -> str:
        for rule in self.document.get(locale, []):
            html = rule.apply(html)
        return html

    def extend(self, other: "CorrectionTable") -> "CorrectionTable":
        for scope, mine in (("text", self.text), ("document", self.document)):
            for locale, rules in getattr(other, scope).items():
                mine.setdefault(locale, []).extend(rules)
        return self

def default_corrections() -> CorrectionTable:
    return CorrectionTable(
        text={
            "en": [CorrectionRule(r"/\s*Hora\b", "/ hour")],
            "es": [CorrectionRule(r"/\s*Hora\b", "/ hora")],
        },
        document={
            "en": [
                # PT split across spans, and the wrong EN machine translation of it
                CorrectionRule(r"Sobre\s+Mim", "About Me"),
                CorrectionRule(r"About\s+Mim", "About Me"),
                CorrectionRule(r"Check[-\s]?up\s+de\s+Marketing", "Marketing check-up"),
            ],
            "es": [CorrectionRule(r"Sobre\s+Mim", "Sobre mí")],
        },
    )

def _rules_from(raw: Any, where: str) -> Dict[str, List[CorrectionRule]]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{where}: expected a mapping of locale -> list of rules")
    out: Dict[str, List[CorrectionRule]] = {}
    for locale, items in raw.items():
        rules = []
        for item in items or []:
            if not isinstance(item, dict) or "pattern" not in item or "replacement" not in item:
                raise ConfigError(f"{where}.{locale}: each rule needs 'pattern' and 'replacement'")
            rules.append(CorrectionRule(str(item["pattern"]), str(item["replacement"]), bool(item.get("ignore_case", True))))
        out[str(locale)] = rules
    return out

def load_correction_rules(path: str) -> CorrectionTable:
    """
    Load extra rules from YAML:

        text:
          en:
            - {pattern: '\\bCurso Intensivo\\b', replacement: 'Intensive Course'}
        document:
          es:
            - {pattern: 'Sobre\\s+Nós', replacement: 'Sobre nosotros'}
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read corrections file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Corrections file {path} must contain a mapping")
    return CorrectionTable(
        text=_rules_from(data.get("text"), "text"),
        document=_rules_from(data.get("document"), "document"),
    )
