from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from .errors import ProviderError

class Translator(ABC):
    @abstractmethod
    def translate_batch(self, src_texts: List[str], target_locale: str) -> List[str]:
        ...

def translate_all(translator: Translator, texts: List[str], target_locale: str, batch_size: int) -> List[str]:
    """
    Translate `texts` in fixed-size batches, one provider call per batch.
    Output is 1:1 with input, in submission order. Any provider failure propagates.
    """
    out: List[str] = []
    for pos in range(0, len(texts), batch_size):
        cur = texts[pos:pos + batch_size]
        part = translator.translate_batch(cur, target_locale)
        if len(part) != len(cur):
            raise ProviderError(f"Provider returned {len(part)} translations for {len(cur)} inputs ({target_locale})")
        out.extend(part)
    return out
