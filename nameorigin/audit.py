#!/usr/bin/env python3
"""
Generated Page Audits
=====================
Two checks over a built site directory:

    scan_pages             content floor (words, internal links, meta
                           description) for every index.html
    run_duplication_audit  near-duplicate explanation blocks across the
                           surname and sibling compatibility pages

The duplication audit pulls the explanation paragraphs out of each page,
compares every pair of blocks of the same type by word-set Jaccard
similarity, and turns the share of near-identical blocks into a risk
score. Expansion mode (adding more pages to an existing batch) only gates
on risk and tier repetition.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .guards import (
    PageThresholds,
    count_internal_links,
    count_words,
    has_meta_description,
    thresholds_for,
)
from .settings import get_setting

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<[^>]+>")
_PARAGRAPH = re.compile(r"<p[^>]*>(.*?)</p>", re.IGNORECASE | re.DOTALL)
_IN_P = r"(?:(?!</p>).)*?"
_TIER_PARAGRAPH = re.compile(
    rf'<p[^>]*class="contextual"[^>]*>({_IN_P}Excellent Flow{_IN_P}High Friction{_IN_P}0–29{_IN_P})</p>',
    re.IGNORECASE | re.DOTALL,
)
_SCORING_FALLBACK = re.compile(
    r'<h2[^>]*id="scoring-logic-heading"[^>]*>.*?<p[^>]*>(.*?)</p>',
    re.IGNORECASE | re.DOTALL,
)
_SLUG_DIR = re.compile(r"^[a-z0-9-]+$")

# (block type, section ids tried in order; the first with paragraphs wins)
BLOCK_SECTIONS = (
    ("scoring-logic", ("scoring-logic-heading",)),
    ("phonetic-breakdown", ("phonetic-heading", "phonetic-breakdown-heading")),
    ("why-matters", ("why-smoothness-heading", "why-harmony-heading")),
    ("how-harmony", ("how-harmony-heading",)),
    ("contrast", ("contrast-heading",)),
)
TIER_BLOCK = "tier-explanation"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class Block:
    """One explanation paragraph found on a page."""
    url: str
    block_type: str
    text: str


@dataclass
class DuplicationReport:
    """Outcome of a duplication audit."""
    duplicate_count: int = 0
    risk_score: float = 0.0
    flagged_urls: List[str] = field(default_factory=list)
    total_pages: int = 0
    total_blocks: int = 0
    tier_repetition_ratio: float = 0.0
    passed_risk: bool = True
    passed_tier: bool = True
    passed_duplicate_count: bool = True
    passed_flagged_urls: bool = True
    passed: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'duplicate_count': self.duplicate_count,
            'risk_score': self.risk_score,
            'flagged_urls': list(self.flagged_urls),
            'total_pages': self.total_pages,
            'total_blocks': self.total_blocks,
            'tier_repetition_ratio': self.tier_repetition_ratio,
            'passed_risk': self.passed_risk,
            'passed_tier': self.passed_tier,
            'passed_duplicate_count': self.passed_duplicate_count,
            'passed_flagged_urls': self.passed_flagged_urls,
            'passed': self.passed,
        }


@dataclass
class PageCheck:
    """Content-floor measurements for one generated page."""
    url: str
    words: int
    internal_links: int
    has_description: bool
    failures: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.failures


# =============================================================================
# Text Comparison
# =============================================================================

def normalize_block(text: Optional[str]) -> str:
    """Strip tags, collapse whitespace, lower-case."""
    if not text or not isinstance(text, str):
        return ''
    return ' '.join(_TAG.sub(' ', text).split()).lower()


def word_set(text: Optional[str]) -> Set[str]:
    """Distinct words longer than one character."""
    return {w for w in normalize_block(text).split() if len(w) > 1}


def jaccard_similarity(text_a: str, text_b: str) -> float:
    """|A ∩ B| / |A ∪ B| over word sets; two empty texts count as identical."""
    set_a = word_set(text_a)
    set_b = word_set(text_b)
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


# =============================================================================
# Extraction
# =============================================================================

def extract_paragraphs(html: str, section_id: str) -> List[str]:
    """Paragraphs (over 20 characters) inside the section labelled ``section_id``."""
    pattern = re.compile(
        rf'<section[^>]*aria-labelledby="{re.escape(section_id)}"[^>]*>(.*?)</section>',
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(html or '')
    if not match:
        return []
    blocks = []
    for content in _PARAGRAPH.findall(match.group(1)):
        content = content.strip()
        if len(content) > 20:
            blocks.append(content)
    return blocks


def extract_tier_paragraph(html: str) -> Optional[str]:
    match = _TIER_PARAGRAPH.search(html or '')
    return match.group(1).strip() if match else None


def extract_blocks(html: str, url: str) -> List[Block]:
    """All explanation blocks on one page."""
    blocks = []
    for block_type, section_ids in BLOCK_SECTIONS:
        found = []
        for section_id in section_ids:
            found = extract_paragraphs(html, section_id)
            if found:
                break
        if not found and block_type == "scoring-logic":
            match = _SCORING_FALLBACK.search(html or '')
            if match:
                found = [match.group(1).strip()]
        blocks.extend(Block(url, block_type, text) for text in found)

    tier = extract_tier_paragraph(html)
    if tier:
        blocks.append(Block(url, TIER_BLOCK, tier))
    return blocks


def collect_compatibility_pages(out_dir) -> List[Tuple[Path, str]]:
    """
    (file path, site URL) for every compatibility page under ``out_dir``.

    Covers names/with-last-name-*.html, names/<slug>/siblings/index.html
    and baby-names-with-*/index.html.
    """
    out_dir = Path(out_dir)
    pages = []
    names_dir = out_dir / "names"
    if names_dir.is_dir():
        for entry in sorted(names_dir.iterdir()):
            if entry.is_file() and entry.name.startswith("with-last-name-") and entry.suffix == ".html":
                pages.append((entry, f"/names/{entry.name}"))
            elif entry.is_dir() and _SLUG_DIR.match(entry.name):
                siblings = entry / "siblings" / "index.html"
                if siblings.exists():
                    pages.append((siblings, f"/names/{entry.name}/siblings/"))
    if out_dir.is_dir():
        for entry in sorted(out_dir.iterdir()):
            if entry.is_dir() and entry.name.startswith("baby-names-with-"):
                index = entry / "index.html"
                if index.exists():
                    pages.append((index, f"/{entry.name}/"))
    return pages


# =============================================================================
# Audits
# =============================================================================

def audit_blocks(blocks: Sequence[Block], total_pages: int,
                 expansion_mode: bool = False) -> DuplicationReport:
    """Score a set of extracted blocks. Split out so it can run without files."""
    threshold = float(get_setting("audit.similarity_threshold", 0.95))
    tier_max = float(get_setting("audit.tier_repetition_max", 0.25))
    risk_max = float(get_setting("audit.risk_threshold", 0.15))
    risk_weight = float(get_setting("audit.risk_weight", 0.16))
    tier_penalty = float(get_setting("audit.tier_penalty", 0.1))
    duplicate_max = int(get_setting("audit.duplicate_count_max", 150))
    flagged_max = int(get_setting("audit.flagged_urls_max", 5))

    flagged_urls: Set[str] = set()
    flagged_blocks: Set[int] = set()
    duplicate_count = 0
    for i in range(len(blocks)):
        for j in range(i + 1, len(blocks)):
            a, b = blocks[i], blocks[j]
            if a.block_type != b.block_type:
                continue
            if jaccard_similarity(a.text, b.text) >= threshold:
                duplicate_count += 1
                flagged_urls.update((a.url, b.url))
                flagged_blocks.update((i, j))

    by_text: Dict[str, List[str]] = {}
    tier_blocks = [b for b in blocks if b.block_type == TIER_BLOCK]
    for block in tier_blocks:
        by_text.setdefault(normalize_block(block.text), []).append(block.url)
    tier_repetition = 0.0
    if tier_blocks:
        tier_repetition = max(len(urls) for urls in by_text.values()) / len(tier_blocks)
    tier_ok = tier_repetition <= tier_max
    if not tier_ok:
        dominant = max(by_text.values(), key=len)
        flagged_urls.update(dominant)

    block_risk = len(flagged_blocks) / len(blocks) if blocks else 0.0
    risk = min(1.0, block_risk * risk_weight + (0.0 if tier_ok else tier_penalty))

    report = DuplicationReport(
        duplicate_count=duplicate_count,
        risk_score=round(risk, 3),
        flagged_urls=sorted(flagged_urls),
        total_pages=total_pages,
        total_blocks=len(blocks),
        tier_repetition_ratio=tier_repetition,
        passed_risk=risk <= risk_max,
        passed_tier=tier_ok,
        passed_duplicate_count=duplicate_count < duplicate_max,
        passed_flagged_urls=len(flagged_urls) < flagged_max,
    )
    if expansion_mode:
        report.passed = report.passed_risk and report.passed_tier
    else:
        report.passed = (report.passed_risk and report.passed_tier
                         and report.passed_duplicate_count and report.passed_flagged_urls)
    return report


def run_duplication_audit(out_dir, expansion_mode: bool = False) -> DuplicationReport:
    """
    Audit every compatibility page under ``out_dir`` for duplicated prose.

    Parameters
    ----------
    out_dir : str or Path
        Root of the generated site.
    expansion_mode : bool
        Gate only on risk score and tier repetition.

    Returns
    -------
    DuplicationReport
    """
    pages = collect_compatibility_pages(out_dir)
    blocks: List[Block] = []
    for path, url in pages:
        try:
            html = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skip {url}: {e}")
            continue
        blocks.extend(extract_blocks(html, url))
    logger.info(f"Duplication audit: {len(pages)} pages, {len(blocks)} blocks")
    return audit_blocks(blocks, len(pages), expansion_mode=expansion_mode)


def page_type_for(url: str) -> str:
    """Guess the page type from its URL."""
    if url.startswith("/baby-names-with-"):
        return "surname"
    if url.endswith("/siblings/"):
        return "sibling"
    if url.startswith("/name/"):
        return "name"
    return ""


def scan_pages(out_dir, thresholds: Optional[PageThresholds] = None) -> List[PageCheck]:
    """
    Measure every generated index.html under ``out_dir``.

    Without explicit ``thresholds`` each page is held to its own page
    type's minimums.
    """
    out_dir = Path(out_dir)
    checks = []
    for path in sorted(out_dir.rglob("index.html")):
        url = '/' + path.parent.relative_to(out_dir).as_posix().strip('.') + '/'
        url = url.replace('//', '/')
        try:
            html = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skip {url}: {e}")
            continue
        limits = thresholds or thresholds_for(page_type_for(url))
        check = PageCheck(
            url=url,
            words=count_words(html),
            internal_links=count_internal_links(html),
            has_description=has_meta_description(html),
        )
        if check.words < limits.min_words:
            check.failures.append(f"words {check.words} < {limits.min_words}")
        if check.internal_links < limits.min_links:
            check.failures.append(f"internal links {check.internal_links} < {limits.min_links}")
        if limits.require_description and not check.has_description:
            check.failures.append("missing meta description")
        checks.append(check)
    failed = sum(1 for c in checks if not c.passed)
    logger.info(f"Scanned {len(checks)} pages, {failed} below floor")
    return checks
