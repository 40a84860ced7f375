from __future__ import annotations
import logging
import os
import time
from typing import Any, Dict, List, Mapping, Optional

import requests

from .errors import MissingCredentialError, ProviderError
from .logger import get_logger
from .translator_base import Translator
from .usage import ProviderUsage

API_KEY_VARS = ("DEEPL_KEY", "DEEPL_API_KEY")

def require_api_key(env: Mapping[str, str] | None = None) -> str:
    env = os.environ if env is None else env
    for var in API_KEY_VARS:
        key = (env.get(var) or "").strip()
        if key:
            return key
    raise MissingCredentialError(f"No DeepL API key found; set {' or '.join(API_KEY_VARS)} (environment or .env)")

def _post_deepl(session: requests.Session, url: str, api_key: str, form: List[tuple], timeout: float) -> List[str]:
    headers = {"Authorization": f"DeepL-Auth-Key {api_key}"}
    try:
        resp = session.post(url, headers=headers, data=form, timeout=timeout)
    except requests.RequestException as e:
        raise ProviderError(f"DeepL request failed: {e}") from e
    if not resp.ok:
        raise ProviderError(f"DeepL error {resp.status_code}: {resp.text[:200]}", status=resp.status_code)
    try:
        data: Any = resp.json()
        return [str(t["text"]) for t in data.get("translations", [])]
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        raise ProviderError(f"Unexpected DeepL response: {resp.text[:200]}", status=resp.status_code) from e


class DeepLTranslator(Translator):
    def __init__(
        self,
        api_key: str,
        endpoint: str,
        *,
        source_lang: Optional[str] = None,
        locale_codes: Optional[Dict[str, str]] = None,
        timeout: float = 60.0,
        qps: float = 0.0,
        usage: ProviderUsage | None = None,
        session: requests.Session | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("DeepL API key is empty")
        self.api_key = api_key
        self.endpoint = endpoint
        self.source_lang = source_lang
        self.locale_codes = dict(locale_codes or {})
        self.timeout = timeout
        self.qps = qps
        self.usage = usage or ProviderUsage()
        self.session = session or requests.Session()
        self.logger = logger or get_logger()
        self._last_call = 0.0

    def _respect_qps(self) -> None:
        if self.qps <= 0:
            return
        min_interval = 1.0 / self.qps
        dt = time.time() - self._last_call
        if dt < min_interval:
            time.sleep(min_interval - dt)

    def target_code(self, locale: str) -> str:
        return self.locale_codes.get(locale, locale.upper())

    def translate_batch(self, src_texts: List[str], target_locale: str) -> List[str]:
        if not src_texts:
            return []
        form = [("text", t) for t in src_texts]
        form.append(("target_lang", self.target_code(target_locale)))
        if self.source_lang:
            form.append(("source_lang", self.source_lang.upper()))
        self._respect_qps()
        self.logger.debug(f"DeepL request: {len(src_texts)} strings -> {self.target_code(target_locale)}")
        out = _post_deepl(self.session, self.endpoint, self.api_key, form, self.timeout)
        self._last_call = time.time()
        self.usage.add(len(src_texts), sum(len(t) for t in src_texts))
        if len(out) != len(src_texts):
            raise ProviderError(f"DeepL returned {len(out)} translations for {len(src_texts)} inputs")
        return out
