from __future__ import annotations
from typing import List

from bs4 import BeautifulSoup, Tag

SWITCHER_STYLE = (
    "#{id}{{position:fixed;top:10px;right:10px;z-index:9999;"
    "font:14px/1.2 system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif;"
    "background:#fff;padding:6px 8px;border-radius:8px;box-shadow:0 2px 8px rgba(0,0,0,.12)}}"
    "#{id} a{{margin:0 4px;text-decoration:none}}"
)


class SeoInjector:
    """Adds hreflang alternates and the language switcher. Safe to run repeatedly on one document."""

    def __init__(self, origin: str, default_locale: str, target_locales: List[str], switcher_id: str = "lang-switcher") -> None:
        self.origin = origin.rstrip("/")
        self.default_locale = default_locale
        self.locales = [default_locale] + [lc for lc in target_locales if lc != default_locale]
        self.switcher_id = switcher_id

    def alternate_url(self, locale: str, rel_path: str) -> str:
        base = self.origin if locale == self.default_locale else f"{self.origin}/{locale}"
        return f"{base}{rel_path}"

    def inject(self, soup: BeautifulSoup, rel_path: str, locale: str) -> BeautifulSoup:
        html = soup.find("html")
        if html is not None:
            html["lang"] = locale
        head = self._ensure(soup, "head")
        self._inject_alternates(soup, head, rel_path)
        body = self._ensure(soup, "body")
        self._inject_switcher(soup, body, rel_path)
        return soup

    def _ensure(self, soup: BeautifulSoup, name: str) -> Tag:
        el = soup.find(name)
        if el is not None:
            return el
        el = soup.new_tag(name)
        html = soup.find("html")
        if html is None:
            if name == "head":
                soup.insert(0, el)
            else:
                soup.append(el)
        elif name == "head":
            html.insert(0, el)
        else:
            html.append(el)
        return el

    def _inject_alternates(self, soup: BeautifulSoup, head: Tag, rel_path: str) -> None:
        for old in soup.find_all("link", rel="alternate", hreflang=True):
            old.decompose()
        for lc in self.locales:
            head.append(self._link(soup, lc, self.alternate_url(lc, rel_path)))
        head.append(self._link(soup, "x-default", self.alternate_url(self.default_locale, rel_path)))

    def _link(self, soup: BeautifulSoup, hreflang: str, href: str) -> Tag:
        return soup.new_tag("link", attrs={"rel": "alternate", "hreflang": hreflang, "href": href})

    def _inject_switcher(self, soup: BeautifulSoup, body: Tag, rel_path: str) -> None:
        for old in soup.find_all(id=self.switcher_id):
            old.decompose()
        bar = soup.new_tag("div", attrs={"id": self.switcher_id})
        style = soup.new_tag("style")
        style.string = SWITCHER_STYLE.format(id=self.switcher_id)
        bar.append(style)
        for i, lc in enumerate(self.locales):
            if i:
                bar.append(" | ")
            a = soup.new_tag("a", attrs={"href": self.alternate_url(lc, rel_path), "hreflang": lc})
            a.string = lc.upper()
            bar.append(a)
        body.append(bar)
