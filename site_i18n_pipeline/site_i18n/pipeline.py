from __future__ import annotations
import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Tuple, TypeVar

from .cache import OverrideStore, TranslationCache
from .config import BuildConfig, ExtractionHints
from .corrections import CorrectionTable, default_corrections, load_correction_rules
from .errors import MissingCredentialError
from .html_extractor import HtmlExtractor, parse_html
from .logger import get_logger
from .minify import Minifier, make_minifier
from .renderer import DocumentRenderer
from .resolver import LocaleResolver
from .seo import SeoInjector
from .translator_base import Translator, translate_all
from .usage import ProviderUsage
from .utils import load_text, root_relative, save_text, unique_preserve_order
from .validators import ValidationIssue, check_length_ratio, check_untranslated

T = TypeVar("T")
R = TypeVar("R")

def compute_gaps(strings: Iterable[str], locale: str, cache: TranslationCache, overrides: OverrideStore) -> List[str]:
    """Strings with neither a cache entry nor an override for `locale`, in input order."""
    return [s for s in unique_preserve_order(list(strings)) if not cache.has(locale, s) and not overrides.has(locale, s)]

def _is_under(path: Path, dirs: List[Path]) -> bool:
    resolved = path.resolve()
    return any(d == resolved or d in resolved.parents for d in dirs)

@dataclass
class BuildReport:
    documents: int = 0
    assets: int = 0
    strings: int = 0
    translated: Dict[str, int] = field(default_factory=dict)
    issues: Dict[str, int] = field(default_factory=dict)
    roots: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    usage: Optional[ProviderUsage] = None

    def summary(self, config: BuildConfig) -> str:
        others = ", ".join(f"/{lc}" for lc in config.locales)
        return f"Build complete. Output in {config.dist_dir} (root={config.default_locale}, plus {others})"


class BuildPipeline:
    """
    AssetCopy -> Extract -> TranslateGaps -> RenderAll, strictly in that order.

    Asset copying, extraction and rendering fan out over files on a bounded thread pool
    and join before the next stage. Gap filling runs one locale at a time: the locale's
    cache is filled in memory and written once, after all of its batches succeed.
    """
    def __init__(
        self,
        config: BuildConfig,
        translator: Optional[Translator] = None,
        *,
        minifier: Optional[Minifier] = None,
        corrections: Optional[CorrectionTable] = None,
        hints: Optional[ExtractionHints] = None,
        usage: Optional[ProviderUsage] = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config.validate()
        self.translator = translator
        self.logger = logger or get_logger()
        self.hints = hints or ExtractionHints()
        self.minifier = minifier or make_minifier(config.minify)
        if corrections is None:
            corrections = default_corrections()
            if config.corrections_path:
                corrections.extend(load_correction_rules(config.corrections_path))
        self.corrections = corrections
        self.usage = usage

        self.cache = TranslationCache(config.cache_dir, self.logger)
        self.overrides = OverrideStore(config.i18n_dir, self.logger)
        self.resolver = LocaleResolver(self.cache, self.overrides, config.default_locale)
        self.extractor = HtmlExtractor(self.hints)
        self.renderer = DocumentRenderer(self.resolver, config.default_locale, self.corrections, self.hints)
        self.seo = SeoInjector(config.site_origin, config.default_locale, config.target_locales, config.switcher_id)

        self.html_files: List[str] = []
        self.asset_files: List[str] = []

    # ---------- helpers ----------

    def _map(self, fn: Callable[[T], R], items: List[T]) -> List[R]:
        if self.config.workers == 1 or len(items) < 2:
            return [fn(it) for it in items]
        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            return list(pool.map(fn, items))

    def discover(self) -> None:
        src = Path(self.config.src_dir)
        # build outputs may live inside the source tree; never re-ingest them
        excluded = [Path(d).resolve() for d in (self.config.dist_dir, self.config.cache_dir)]
        files = sorted(str(p) for p in src.rglob("*") if p.is_file() and not _is_under(p, excluded))
        self.html_files = [f for f in files if f.endswith(".html")]
        self.asset_files = [f for f in files if not f.endswith(".html")]

    def output_roots(self) -> List[str]:
        dist = self.config.dist_dir
        return [dist] + [os.path.join(dist, lc) for lc in self.config.locales]

    def output_targets(self, src_file: str) -> List[Tuple[str, str]]:
        """(locale, output path) for every rendering of one document."""
        rel = os.path.relpath(src_file, self.config.src_dir)
        dist = self.config.dist_dir
        targets = [(self.config.default_locale, os.path.join(dist, rel))]
        targets += [(lc, os.path.join(dist, lc, rel)) for lc in self.config.locales]
        return targets

    # ---------- stages ----------

    def copy_assets(self) -> int:
        jobs = []
        for root in self.output_roots():
            for f in self.asset_files:
                jobs.append((f, os.path.join(root, os.path.relpath(f, self.config.src_dir))))

        def _copy(job: Tuple[str, str]) -> None:
            src, dst = job
            os.makedirs(os.path.dirname(dst), exist_ok=True)
            shutil.copyfile(src, dst)

        self._map(_copy, jobs)
        self.logger.info(f"Copied {len(self.asset_files)} static file(s) into {len(self.output_roots())} output root(s)")
        return len(jobs)

    def extract(self) -> List[str]:
        per_doc = self._map(lambda f: sorted(self.extractor.extract(load_text(f))), self.html_files)
        strings = unique_preserve_order([s for doc in per_doc for s in doc])
        self.logger.info(f"Extracted {len(strings)} unique string(s) from {len(self.html_files)} document(s)")
        return strings

    def translate_gaps(self, strings: List[str], report: Optional[BuildReport] = None) -> Dict[str, int]:
        report = report or BuildReport()
        for locale in self.config.target_locales:
            need = compute_gaps(strings, locale, self.cache, self.overrides)
            report.translated[locale] = 0
            report.issues[locale] = 0
            if not need:
                self.logger.info(f"[{locale}] nothing to translate (using cache/overrides).")
                continue
            if self.config.dry_run:
                self.logger.info(f"[{locale}] dry run: {len(need)} string(s) left untranslated")
                continue
            if self.translator is None:
                raise MissingCredentialError("No translator configured")
            self.logger.info(f"[{locale}] translating {len(need)} strings...")
            out = translate_all(self.translator, need, locale, self.config.batch_size)
            issues: List[ValidationIssue] = []
            for src, tgt in zip(need, out):
                self.cache.set(locale, src, tgt)
                issues.extend(check_untranslated(src, tgt, locale))
                issues.extend(check_length_ratio(src, tgt, locale, self.config.length_ratio_min, self.config.length_ratio_max))
            path = self.cache.save(locale)
            report.translated[locale] = len(need)
            report.issues[locale] = len(issues)
            for issue in issues:
                self.logger.warning(f"[{locale}] {issue.kind}: {issue.detail}: {issue.source!r} -> {issue.target!r}")
            self.logger.info(f"[{locale}] cached {len(need)} new translation(s) in {path}")
        return report.translated

    def render_document(self, src_file: str, locale: str, out_file: str) -> str:
        soup = parse_html(load_text(src_file))
        rel = root_relative(src_file, self.config.src_dir)
        self.renderer.render(soup, locale)
        self.seo.inject(soup, rel, locale)
        html = self.corrections.fix_document(locale, str(soup))
        html = self.minifier(html)
        save_text(out_file, html)
        return out_file

    def render_all(self) -> List[str]:
        # load every store up front; rendering threads only read
        for lc in self.config.target_locales:
            self.cache.load(lc)
            self.overrides.load(lc)
        jobs = [(f, lc, out) for f in self.html_files for lc, out in self.output_targets(f)]
        written = self._map(lambda job: self.render_document(*job), jobs)
        self.logger.info(f"Rendered {len(written)} page(s) across {len(self.config.locales)} locale(s)")
        return written

    def run(self) -> BuildReport:
        if self.translator is None and not self.config.dry_run:
            raise MissingCredentialError("A translator is required unless running with dry_run")
        report = BuildReport(usage=self.usage)
        self.discover()
        os.makedirs(self.config.dist_dir, exist_ok=True)
        self.copy_assets()
        report.assets = len(self.asset_files)
        strings = self.extract()
        report.strings = len(strings)
        self.translate_gaps(strings, report)
        report.outputs = self.render_all()
        report.roots = self.output_roots()
        report.documents = len(self.html_files)
        if self.usage is not None and self.usage.requests:
            self.logger.info(f"Provider usage: {self.usage.requests} request(s), {self.usage.chars} chars (est. {self.usage.est_cost:.2f})")
        self.logger.info(report.summary(self.config))
        return report
