"""
Shared fixtures: a small Portuguese source site, a build config pointing into tmp_path,
and a recording fake translator standing in for the DeepL API.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from site_i18n.config import BuildConfig, MinifyOptions
from site_i18n.errors import ProviderError
from site_i18n.logger import LOGGER_NAME
from site_i18n.translator_base import Translator


class FakeTranslator(Translator):
    """Looks strings up in `table`, otherwise tags them with the locale. Records every call."""

    def __init__(self, table: Optional[Dict[str, Dict[str, str]]] = None, fail_on_call: Optional[int] = None):
        self.table = table or {}
        self.calls: List[Tuple[List[str], str]] = []
        self.fail_on_call = fail_on_call

    def translate_batch(self, src_texts: List[str], target_locale: str) -> List[str]:
        self.calls.append((list(src_texts), target_locale))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ProviderError("DeepL error 456: quota exceeded", status=456)
        per_locale = self.table.get(target_locale, {})
        return [per_locale.get(s, f"[{target_locale}] {s}") for s in src_texts]

    def sent(self, locale: str) -> List[str]:
        return [s for texts, lc in self.calls if lc == locale for s in texts]


INDEX_HTML = """<!DOCTYPE html>
<html lang="pt">
<head>
<meta charset="utf-8">
<title>Início</title>
<meta name="description" content="Academia de formação em Lisboa">
<link rel="stylesheet" href="/css/site.css">
</head>
<body>
<h1>Bem-vindo</h1>
<p>  Olá Mundo  </p>
<img src="/img/equipa.jpg" alt="Foto da equipa">
<script>var label = "Não traduzir";</script>
<style>.x{content:"Nada"}</style>
</body>
</html>
"""

ABOUT_HTML = """<!DOCTYPE html>
<html lang="pt">
<head><title>Sobre Nós</title></head>
<body><p>Bem-vindo</p></body>
</html>
"""


@pytest.fixture
def site(tmp_path: Path) -> Path:
    src = tmp_path / "new-main"
    (src / "css").mkdir(parents=True)
    (src / "img").mkdir()
    (src / "blog").mkdir()
    (src / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (src / "about.html").write_text(ABOUT_HTML, encoding="utf-8")
    (src / "blog" / "post.html").write_text(
        "<html><head><title>Artigo</title></head><body><p>Texto do artigo</p></body></html>",
        encoding="utf-8",
    )
    (src / "css" / "site.css").write_text("body{margin:0}", encoding="utf-8")
    (src / "img" / "equipa.jpg").write_bytes(b"\xff\xd8\xff\xe0binary")
    (src / ".htaccess").write_text("Options -Indexes\n", encoding="utf-8")
    return src


@pytest.fixture
def config(tmp_path: Path, site: Path) -> BuildConfig:
    return BuildConfig(
        src_dir=str(site),
        dist_dir=str(tmp_path / "dist"),
        cache_dir=str(tmp_path / ".i18n-cache"),
        i18n_dir=str(tmp_path / "i18n"),
        default_locale="pt",
        target_locales=["en", "es"],
        site_origin="https://www.queenacademy.pt",
        minify=MinifyOptions(False, False, False, False),
        workers=2,
    )


@pytest.fixture
def write_json():
    def _write(path: Path, data: object) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def reset_logger():
    # setup_logger binds the stdout of whichever test ran first
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for h in list(logger.handlers):
        logger.removeHandler(h)
