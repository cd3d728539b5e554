#!/usr/bin/env python3
"""
Content-Floor Guards
====================
Measures a finished HTML page and refuses to ship it when it is thin:
too few words in the main content, too few internal links, or no meta
description. A failing page raises ThinContentError and is never written.

Minimums are per page type and live under ``guards`` in app.yaml.

Usage:
    from nameorigin.guards import assert_page_thresholds, thresholds_for

    assert_page_thresholds(html, page_id="/baby-names-with-smith/",
                           thresholds=thresholds_for("surname"))
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .settings import get_setting, site_host

logger = logging.getLogger(__name__)

_MAIN = re.compile(r"<main\b[^>]*>(.*?)</main>", re.IGNORECASE | re.DOTALL)
_SCRIPT = re.compile(r"<script\b[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE = re.compile(r"<style\b[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG = re.compile(r"<[^>]+>")
_LINK = re.compile(r"""<a\s+[^>]*href\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_META_DESC = (
    re.compile(r"""<meta\s+[^>]*name\s*=\s*["']description["'][^>]*content\s*=\s*["']([^"']*)["']""",
               re.IGNORECASE),
    re.compile(r"""<meta\s+[^>]*content\s*=\s*["']([^"']*)["'][^>]*name\s*=\s*["']description["']""",
               re.IGNORECASE),
)

WORDS = "words"
INTERNAL_LINKS = "internal_links"
META_DESCRIPTION = "meta_description"


class ThinContentError(ValueError):
    """A page fell below its content floor."""

    def __init__(self, page_id: str, metric: str, measured, required):
        self.page_id = page_id
        self.metric = metric
        self.measured = measured
        self.required = required
        label = page_id or "page"
        if metric == META_DESCRIPTION:
            message = f"{label}: missing meta description"
        else:
            message = f"{label}: {metric.replace('_', ' ')} {measured} < {required}"
        super().__init__(message)


@dataclass(frozen=True)
class PageThresholds:
    """Minimums one page type must meet."""
    min_words: int
    min_links: int
    require_description: bool = True


def thresholds_for(page_type: Optional[str] = None) -> PageThresholds:
    """
    Minimums for a page type (name, surname, sibling, jurisdiction).

    Unknown or missing page types get the ``guards.default`` minimums.
    """
    default = get_setting("guards.default", {}) or {}
    cfg = dict(default)
    if page_type:
        cfg.update(get_setting(f"guards.page_types.{page_type}", {}) or {})
    return PageThresholds(
        min_words=int(cfg.get('min_words', 400)),
        min_links=int(cfg.get('min_links', 20)),
        require_description=bool(cfg.get('require_description', True)),
    )


# =============================================================================
# Measurements
# =============================================================================

def main_content_text(html: str) -> str:
    """Visible text of the ``<main>`` element, or of the whole page."""
    html = html or ''
    match = _MAIN.search(html)
    fragment = match.group(1) if match else html
    fragment = _SCRIPT.sub(' ', fragment)
    fragment = _STYLE.sub(' ', fragment)
    fragment = _TAG.sub(' ', fragment)
    return ' '.join(fragment.split())


def count_words(html: str) -> int:
    """Whitespace-separated tokens in the main content."""
    return len(main_content_text(html).split())


def count_internal_links(html: str, host: Optional[str] = None) -> int:
    """Anchors whose href is root-relative or points at the site host."""
    if host is None:
        host = site_host()
    count = 0
    for href in _LINK.findall(html or ''):
        href = href.strip()
        if href.startswith('/') or (host and host in href):
            count += 1
    return count


def has_meta_description(html: str) -> bool:
    for pattern in _META_DESC:
        match = pattern.search(html or '')
        if match and match.group(1).strip():
            return True
    return False


def assert_page_thresholds(html: str, page_id: str = '',
                           thresholds: Optional[PageThresholds] = None,
                           host: Optional[str] = None) -> None:
    """
    Raise ThinContentError if ``html`` is below its floor.

    Checks run in order: word count, internal links, meta description.
    The first failure is raised.
    """
    if thresholds is None:
        thresholds = thresholds_for()
    words = count_words(html)
    if words < thresholds.min_words:
        raise ThinContentError(page_id, WORDS, words, thresholds.min_words)
    links = count_internal_links(html, host)
    if links < thresholds.min_links:
        raise ThinContentError(page_id, INTERNAL_LINKS, links, thresholds.min_links)
    if thresholds.require_description and not has_meta_description(html):
        raise ThinContentError(page_id, META_DESCRIPTION, 0, 1)


def write_html_with_guard(path, html: str, page_id: Optional[str] = None,
                          thresholds: Optional[PageThresholds] = None) -> Path:
    """Check a page, then write it. Nothing is written when the check fails."""
    path = Path(path)
    assert_page_thresholds(html, page_id=page_id or str(path), thresholds=thresholds)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding='utf-8')
    logger.debug(f"Wrote {path}")
    return path
