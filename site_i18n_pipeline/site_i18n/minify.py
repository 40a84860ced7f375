from __future__ import annotations
from typing import Callable

import minify_html

from .config import MinifyOptions

Minifier = Callable[[str], str]

def make_minifier(opts: MinifyOptions) -> Minifier:
    """
    Bind the option set to minify-html. minify-html always collapses whitespace,
    so an option set with every flag off disables minification entirely.
    """
    if not opts.enabled:
        return lambda html: html

    def _minify(html: str) -> str:
        return minify_html.minify(
            html,
            minify_css=opts.minify_css,
            minify_js=opts.minify_js,
            keep_comments=not opts.remove_comments,
            keep_closing_tags=True,
            keep_html_and_head_opening_tags=True,
        )
    return _minify
