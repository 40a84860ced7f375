from __future__ import annotations
from typing import Optional

from bs4 import BeautifulSoup, NavigableString

from .config import ExtractionHints
from .corrections import CorrectionTable
from .html_extractor import find_meta_description, find_title, iter_attributes, iter_text_nodes
from .resolver import LocaleResolver
from .utils import split_whitespace


class DocumentRenderer:
    """
    Rewrites a parsed document into a target locale, in place.

    Text nodes keep their exact leading/trailing whitespace around the translated core;
    attribute values, <title> and the meta description are replaced by the trimmed translation.
    """
    def __init__(
        self,
        resolver: LocaleResolver,
        default_locale: str,
        corrections: Optional[CorrectionTable] = None,
        hints: Optional[ExtractionHints] = None,
    ) -> None:
        self.resolver = resolver
        self.default_locale = default_locale
        self.corrections = corrections or CorrectionTable()
        self.hints = hints or ExtractionHints()

    def translate(self, locale: str, source: str) -> str:
        return self.corrections.fix_text(locale, self.resolver.resolve(locale, source))

    def render(self, soup: BeautifulSoup, locale: str) -> BeautifulSoup:
        if locale == self.default_locale:
            return soup

        for node in iter_text_nodes(soup, self.hints):
            lead, core, trail = split_whitespace(str(node))
            node.replace_with(NavigableString(lead + self.translate(locale, core) + trail))

        for el, attr, value in list(iter_attributes(soup, self.hints)):
            el[attr] = self.translate(locale, value)

        title = find_title(soup)
        if title is not None and title.get_text().strip():
            title.string = self.translate(locale, title.get_text().strip())

        desc = find_meta_description(soup)
        if desc is not None and (desc.get("content") or "").strip():
            desc["content"] = self.translate(locale, desc["content"].strip())
        return soup
