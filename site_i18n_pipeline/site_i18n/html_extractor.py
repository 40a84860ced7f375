from __future__ import annotations
from typing import Iterator, Optional, Set, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .config import ExtractionHints

HTML_PARSER = "html.parser"

def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, HTML_PARSER)

def _in_head(node: NavigableString) -> bool:
    return any(p.name in ("head", "title") for p in node.parents if isinstance(p, Tag))

def iter_text_nodes(soup: BeautifulSoup, hints: ExtractionHints) -> Iterator[NavigableString]:
    """
    Yield the translatable text nodes of the document body.

    A node qualifies when it is plain text (not a comment, CDATA, doctype or
    processing instruction), carries non-whitespace content, and its parent
    element is not one of `hints.skip_tags`.

    The whole document is walked, minus <head>: html.parser leaves content
    found after </body> or </html> outside the body element.
    """
    for node in list(soup.find_all(string=True)):
        if isinstance(node, PreformattedString):
            continue
        parent = node.parent
        if parent is None or (parent.name or "").lower() in hints.skip_tags:
            continue
        if not node.strip():
            continue
        if _in_head(node):
            continue
        yield node

def iter_attributes(soup: BeautifulSoup, hints: ExtractionHints) -> Iterator[Tuple[Tag, str, str]]:
    """Yield (element, attribute, trimmed value) for every non-empty whitelisted attribute."""
    for attr in hints.attributes:
        for el in soup.find_all(attrs={attr: True}):
            v = el.get(attr)
            if isinstance(v, list):
                v = " ".join(v)
            if v and v.strip():
                yield el, attr, v.strip()

def find_title(soup: BeautifulSoup) -> Optional[Tag]:
    return soup.find("title")

def find_meta_description(soup: BeautifulSoup) -> Optional[Tag]:
    return soup.find("meta", attrs={"name": "description"})


class HtmlExtractor:
    def __init__(self, hints: ExtractionHints | None = None) -> None:
        self.hints = hints or ExtractionHints()

    def extract_from_soup(self, soup: BeautifulSoup) -> Set[str]:
        found: Set[str] = set()

        for node in iter_text_nodes(soup, self.hints):
            found.add(node.strip())

        title = find_title(soup)
        if title is not None and title.get_text().strip():
            found.add(title.get_text().strip())

        desc = find_meta_description(soup)
        if desc is not None and (desc.get("content") or "").strip():
            found.add(desc["content"].strip())

        for _, _, value in iter_attributes(soup, self.hints):
            found.add(value)
        return found

    def extract(self, html: str) -> Set[str]:
        return self.extract_from_soup(parse_html(html))

def extract_strings(html: str, hints: ExtractionHints | None = None) -> Set[str]:
    return HtmlExtractor(hints).extract(html)
