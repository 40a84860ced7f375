from __future__ import annotations
from typing import List
from dataclasses import dataclass

@dataclass
class ValidationIssue:
    kind: str
    detail: str
    source: str
    target: str
    locale: str

def check_untranslated(src: str, tgt: str, locale: str) -> List[ValidationIssue]:
    # Brand names and numbers legitimately come back unchanged, so this is only a hint
    if src.strip() and src.strip() == tgt.strip() and any(c.isalpha() for c in src):
        return [ValidationIssue("untranslated", "Provider returned the source text unchanged", src, tgt, locale)]
    return []

MIN_RATIO_CHARS = 12

def check_length_ratio(src: str, tgt: str, locale: str, lo: float, hi: float) -> List[ValidationIssue]:
    # short labels ("OK", "Sim") swing wildly in length between languages
    if len(src) < MIN_RATIO_CHARS:
        return []
    ratio = len(tgt) / len(src)
    if lo <= ratio <= hi:
        return []
    return [ValidationIssue("length_ratio", f"Length ratio {ratio:.2f} outside [{lo}, {hi}]", src, tgt, locale)]
