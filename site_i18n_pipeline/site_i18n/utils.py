import os
from typing import List, Tuple

def split_whitespace(s: str) -> Tuple[str, str, str]:
    """Split `s` into (leading whitespace, trimmed core, trailing whitespace)."""
    core = s.strip()
    if not core:
        return s, "", ""
    lead = s[: len(s) - len(s.lstrip())]
    trail = s[len(s.rstrip()):]
    return lead, core, trail

def unique_preserve_order(seq: List[str]) -> List[str]:
    seen, out = set(), []
    for s in seq:
        if s not in seen:
            seen.add(s); out.append(s)
    return out

def root_relative(path: str, base_dir: str) -> str:
    # "/about.html", "/blog/post.html"
    return "/" + os.path.relpath(path, base_dir).replace(os.sep, "/")

def load_text(path: str) -> str:
    # read and remove a leading BOM; undecodable bytes become U+FFFD
    with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
        return f.read()

def save_text(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
