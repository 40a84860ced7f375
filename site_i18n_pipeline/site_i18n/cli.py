from __future__ import annotations
import argparse, json, sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .cache import TranslationCache
from .config import BuildConfig, MinifyOptions, load_config
from .errors import BuildError, ProviderError
from .logger import setup_logger
from .pipeline import BuildPipeline
from .translator_deepl import DeepLTranslator, require_api_key
from .usage import ProviderUsage
from .utils import save_text

EXIT_PRECONDITION = 2
EXIT_PROVIDER = 3

def config_from_args(args: argparse.Namespace) -> BuildConfig:
    cfg = load_config(args.config) if getattr(args, "config", None) else BuildConfig()
    overrides = {
        "src_dir": getattr(args, "src", None),
        "dist_dir": getattr(args, "dist", None),
        "cache_dir": getattr(args, "cache_dir", None),
        "i18n_dir": getattr(args, "i18n_dir", None),
        "default_locale": getattr(args, "default_locale", None),
        "target_locales": getattr(args, "locales", None),
        "site_origin": getattr(args, "origin", None),
        "batch_size": getattr(args, "batch_size", None),
        "workers": getattr(args, "workers", None),
        "corrections_path": getattr(args, "corrections", None),
        "log_level": getattr(args, "log_level", None),
    }
    for k, v in overrides.items():
        if v is not None:
            setattr(cfg, k, v)
    if getattr(args, "no_minify", False):
        cfg.minify = MinifyOptions(False, False, False, False)
    if getattr(args, "dry_run", False):
        cfg.dry_run = True
    return cfg

def build(cfg: BuildConfig) -> int:
    logger = setup_logger(cfg.log_level)
    translator = None
    usage = ProviderUsage()
    if not cfg.dry_run:
        api_key = require_api_key()
        translator = DeepLTranslator(
            api_key, cfg.provider_endpoint,
            source_lang=cfg.source_lang, locale_codes=cfg.provider_locales,
            timeout=cfg.timeout, qps=cfg.qps, usage=usage, logger=logger,
        )
    report = BuildPipeline(cfg, translator, usage=usage, logger=logger).run()
    print(report.summary(cfg))
    return 0

def extract(cfg: BuildConfig, output: Optional[str]) -> int:
    logger = setup_logger(cfg.log_level)
    pipeline = BuildPipeline(cfg, None, logger=logger)
    pipeline.discover()
    strings = sorted(pipeline.extract())
    text = json.dumps(strings, ensure_ascii=False, indent=2) + "\n"
    if output:
        save_text(output, text)
        logger.info(f"Wrote {len(strings)} string(s) to {output}")
    else:
        sys.stdout.write(text)
    return 0

def forget(cfg: BuildConfig, locale: str, keys: List[str]) -> int:
    logger = setup_logger(cfg.log_level)
    cache = TranslationCache(cfg.cache_dir, logger)
    removed = cache.forget(locale, keys)
    if removed:
        path = cache.save(locale)
        logger.info(f"[{locale}] removed {removed} cached translation(s) from {path}")
    else:
        logger.info(f"[{locale}] none of the given strings were cached")
    return 0

def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", help="YAML build configuration")
    p.add_argument("--src", help="Source site directory")
    p.add_argument("--cache-dir", help="Machine translation cache directory")
    p.add_argument("--log-level", default=None)

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="site-i18n", description="Build localized copies of a static HTML site")
    sub = ap.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="Run the full localization build")
    _add_common(b)
    b.add_argument("--dist", help="Output directory")
    b.add_argument("--i18n-dir", help="Directory holding overrides.<locale>.json")
    b.add_argument("--default-locale")
    b.add_argument("--locales", nargs="+", help="Target locales, in order")
    b.add_argument("--origin", help="Public site origin used for hreflang links")
    b.add_argument("--batch-size", type=int)
    b.add_argument("--workers", type=int)
    b.add_argument("--corrections", help="YAML file with extra correction rules")
    b.add_argument("--no-minify", action="store_true")
    b.add_argument("--dry-run", action="store_true",
                   help="Skip the provider; untranslated strings fall back to the source text.")

    e = sub.add_parser("extract", help="List every translatable string in the source tree")
    _add_common(e)
    e.add_argument("--output", help="Write the JSON list here instead of stdout")

    f = sub.add_parser("forget", help="Drop cached translations so the next build fetches them again")
    _add_common(f)
    f.add_argument("--locale", required=True)
    f.add_argument("strings", nargs="+")

    args = ap.parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    logger = setup_logger(args.log_level or "INFO")
    try:
        cfg = config_from_args(args)
        if args.cmd == "build":
            return build(cfg)
        if args.cmd == "extract":
            return extract(cfg, args.output)
        return forget(cfg, args.locale, args.strings)
    except BuildError as e:
        logger.error(f"{e.category} failure: {e}")
        return EXIT_PROVIDER if isinstance(e, ProviderError) else EXIT_PRECONDITION

if __name__ == "__main__":
    sys.exit(main())
