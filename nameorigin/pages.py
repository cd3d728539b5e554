#!/usr/bin/env python3
"""
Page Assembly
=============
Builds the two compatibility page families as complete HTML documents:

    /baby-names-with-<surname>/     first names that flow with a surname
    /names/<name>/siblings/         sibling names that harmonize with a name

Scores and prose come from the scoring and explainer modules; this module
only arranges them, escapes them and enforces the content floor. Every
page passes assert_page_thresholds before it is returned, so a thin page
raises instead of being written.

Usage:
    from nameorigin.dataset import Dataset
    from nameorigin.pages import build_surname_pages, write_pages

    data = Dataset.load()
    pages = build_surname_pages(data, batch=20)
    write_pages(pages, "site/")
"""

import html
import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .compatibility import compute_smoothness, explain_pairing, rank_first_names
from .explainers import CompatibilityExplainer, SiblingExplainer, build_sibling_context
from .guards import (
    INTERNAL_LINKS,
    PageThresholds,
    ThinContentError,
    assert_page_thresholds,
    count_internal_links,
    count_words,
    thresholds_for,
    write_html_with_guard,
)
from .harmony import SiblingHarmonyScorer, harmony_weights
from .phonetics import record_syllables, starts_with_vowel
from .records import SurnameRecord
from .settings import get_setting, site_url
from .variants import block_order, phonetic_block_order

logger = logging.getLogger(__name__)

EXT = ".html"
SURNAME = "surname"
SIBLING = "sibling"

_NAME_LINK = re.compile(r"""href\s*=\s*["'](?:https?://[^/"']+)?/name/[^/"']+/?["']""", re.IGNORECASE)

GENDER_HEADINGS = (
    ("boy", "Boy Names That Go Well With {surname}"),
    ("girl", "Girl Names That Go Well With {surname}"),
    ("unisex", "Gender-Neutral Names That Pair Well With {surname}"),
)

PHONETIC_HEADINGS = {
    "transition": "Vowel and consonant transition",
    "syllable": "Syllable analysis",
    "rhythm": "Rhythm",
    "consonant": "Consonant collision",
}


@dataclass
class PageResult:
    """A finished page that has passed its content floor."""
    path_segment: str
    html: str
    word_count: int
    internal_links: int
    page_type: str = SURNAME

    @property
    def relative_path(self) -> Path:
        return Path(self.path_segment.strip('/')) / "index.html"


# =============================================================================
# HTML Helpers
# =============================================================================

def slug(text: Any) -> str:
    """'Mary Jane' -> 'mary-jane'."""
    value = re.sub(r"\s+", "-", str(text or '').strip().lower())
    return re.sub(r"[^a-z0-9-]", "", value)


def html_escape(value: Any) -> str:
    return html.escape(str(value)) if value is not None else ''


def script_json(data: Any) -> str:
    """JSON for an inline <script> block; <, > and & cannot close the element."""
    text = json.dumps(data, ensure_ascii=False)
    return text.replace('<', '\\u003c').replace('>', '\\u003e').replace('&', '\\u0026')


def name_path(name: str) -> str:
    return f"/name/{slug(name)}/"


def name_link(record) -> str:
    return f'<a href="{name_path(record.name)}">{html_escape(record.name)}</a>'


def paragraph(text: str) -> str:
    """Escaped prose paragraph; empty text renders nothing."""
    if not text:
        return ''
    return f'<p class="contextual">{html_escape(text)}</p>'


def section(section_id: str, heading: str, body: str) -> str:
    return (f'<section aria-labelledby="{section_id}"><h2 id="{section_id}">{html_escape(heading)}</h2>'
            f'{body}</section>')


def breadcrumb_html(items: Sequence[Dict[str, str]]) -> str:
    parts = []
    for i, item in enumerate(items):
        if i == len(items) - 1:
            parts.append(f'<span aria-current="page">{html_escape(item["name"])}</span>')
        else:
            parts.append(f'<a href="{html_escape(item["url"])}">{html_escape(item["name"])}</a>')
    return ' / '.join(parts)


def breadcrumb_json_ld(items: Sequence[Dict[str, str]], root: str) -> Dict[str, Any]:
    return {
        '@context': 'https://schema.org',
        '@type': 'BreadcrumbList',
        'itemListElement': [
            {'@type': 'ListItem', 'position': i + 1, 'name': item['name'], 'item': root + item['url']}
            for i, item in enumerate(items)
        ],
    }


def base_layout(title: str, description: str, path_segment: str,
                breadcrumb: Sequence[Dict[str, str]], main_content: str) -> str:
    """Wrap main content in the site shell (head, nav, breadcrumb, footer)."""
    root = site_url()
    host = get_setting("site.host", "")
    json_ld = script_json(breadcrumb_json_ld(breadcrumb, root))
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta name="robots" content="index, follow">
  <meta name="description" content="{html_escape(description[:160])}">
  <title>{html_escape(title)}</title>
  <link rel="stylesheet" href="/styles.min.css">
  <link rel="canonical" href="{html_escape(root + path_segment)}" />
  <script type="application/ld+json">{json_ld}</script>
</head>
<body>
  <header class="site-header" role="banner">
    <div class="container">
      <a href="/" class="site-logo">{html_escape(host)}</a>
      <nav class="site-nav" aria-label="Main navigation">
        <a href="/names">Names</a>
        <a href="/names/boy{EXT}">Boy Names</a>
        <a href="/names/girl{EXT}">Girl Names</a>
        <a href="/names/unisex{EXT}">Unisex Names</a>
        <a href="/names/letters{EXT}">By letter</a>
        <a href="/names/with-last-name{EXT}">Last name fit</a>
      </nav>
    </div>
  </header>
  <main class="container section">
    <nav aria-label="Breadcrumb" class="breadcrumb">{breadcrumb_html(breadcrumb)}</nav>
    {main_content}
  </main>
  <footer class="site-footer" role="contentinfo">
    <div class="container">
      <p class="mb-0">&copy; {html_escape(host)}. Curated name meanings and origins.</p>
    </div>
  </footer>
</body>
</html>
"""


# =============================================================================
# Browse Sections
# =============================================================================

def gender_section() -> str:
    links = ' · '.join(
        f'<a href="/names/{g}{EXT}">{label}</a>'
        for g, label in (("boy", "Boy names"), ("girl", "Girl names"), ("unisex", "Unisex names"))
    )
    return section("gender-heading", "Browse by gender", f'<p class="name-links">{links}</p>')


def country_section() -> str:
    countries = get_setting("pages.browse_countries", []) or []
    links = ' · '.join(
        f'<a href="/names/{html_escape(c["slug"])}{EXT}">{html_escape(c["label"])}</a>'
        for c in countries
    )
    return section("country-heading", "Browse by country", f'<p class="name-links">{links}</p>')


def alphabet_section() -> str:
    links = ' '.join(
        f'<a href="/names/{letter}{EXT}">{letter.upper()}</a>'
        for letter in "abcdefghijklmnopqrstuvwxyz"
    )
    return section("alphabet-heading", "Browse by letter (A-Z)", f'<p class="letters-hub">{links}</p>')


def core_links_section() -> str:
    core = (
        ("/", "Home"),
        ("/names", "All names"),
        (f"/names/boy{EXT}", "Boy names"),
        (f"/names/girl{EXT}", "Girl names"),
        (f"/names/unisex{EXT}", "Unisex names"),
        (f"/names/with-last-name{EXT}", "Last name compatibility"),
        (f"/names/letters{EXT}", "Browse by letter"),
    )
    links = ' · '.join(f'<a href="{href}">{html_escape(text)}</a>' for href, text in core)
    return section("browse-heading", "Browse the site", f'<p class="internal-links">{links}</p>')


def count_name_links(html: str) -> int:
    """Links to individual /name/<slug>/ pages."""
    return len(_NAME_LINK.findall(html or ''))


def cap_batch(requested: Optional[int], default_setting: str, max_setting: str,
              default: int, maximum: int) -> int:
    """Requested batch size, capped at the configured maximum with a warning."""
    limit = int(get_setting(max_setting, maximum))
    size = int(requested if requested is not None else get_setting(default_setting, default))
    if size > limit:
        logger.warning(f"Batch requested ({size}) exceeds maximum ({limit}). Capping at {limit}.")
        size = limit
    return max(0, size)


def _finish(path_segment: str, html: str, page_type: str,
            thresholds: PageThresholds) -> PageResult:
    assert_page_thresholds(html, page_id=path_segment, thresholds=thresholds)
    return PageResult(
        path_segment=path_segment,
        html=html,
        word_count=count_words(html),
        internal_links=count_internal_links(html),
        page_type=page_type,
    )


# =============================================================================
# Surname Pages
# =============================================================================

def _surname_record(surname) -> SurnameRecord:
    if isinstance(surname, SurnameRecord):
        return surname
    return SurnameRecord.from_dict(surname)


def build_surname_page(surname, names: Sequence, explainer: Optional[CompatibilityExplainer] = None,
                       thresholds: Optional[PageThresholds] = None,
                       list_size: Optional[int] = None) -> PageResult:
    """
    Build /baby-names-with-<surname>/.

    Parameters
    ----------
    surname : str or SurnameRecord
        The family name the page is about.
    names : sequence of NameRecord
        Candidate first names.
    explainer : CompatibilityExplainer, optional
        Prose source. Defaults to the shipped variant library.
    thresholds : PageThresholds, optional
        Content floor. Defaults to the ``surname`` page type.

    Returns
    -------
    PageResult

    Raises
    ------
    ThinContentError
        If the page stays below its word or link floor after the
        "Why Name Flow Matters" block has been added.
    """
    record = _surname_record(surname)
    if not record.name:
        raise ValueError("surname is required")
    explainer = explainer or CompatibilityExplainer()
    thresholds = thresholds or thresholds_for(SURNAME)
    if list_size is None:
        list_size = int(get_setting("compatibility.list_size", 12))

    last = record.name
    last_esc = html_escape(last)
    key = slug(last)
    path_segment = f"/baby-names-with-{key}/"
    last_syl = record_syllables(record)

    lists = {}
    for gender, _ in GENDER_HEADINGS:
        lists[gender] = rank_first_names(names, record, limit=list_size, gender=gender)

    list_sections = []
    for gender, heading in GENDER_HEADINGS:
        ranked = lists[gender]
        if not ranked:
            continue
        items = ''.join(
            f'<li>{name_link(r.record)}: {html_escape(explain_pairing(r.record, record, r.reasons))}</li>'
            for r in ranked
        )
        list_sections.append(section(f"{gender}-heading", heading.format(surname=last),
                                     f'<ul class="name-list">{items}</ul>'))

    # Smoothness scores for the leading pick of each list
    rows = []
    for gender, _ in GENDER_HEADINGS:
        for ranked in lists[gender][:2]:
            smooth = compute_smoothness(ranked.record, record)
            rows.append(f'<tr><td>{name_link(ranked.record)}</td><td class="smoothness-score">'
                        f'{smooth.score}</td><td>{html_escape(smooth.tier)}</td></tr>')
    score_section = ''
    if rows:
        score_section = section(
            "smoothness-heading", f"Smoothness scores with {last}",
            '<div class="score-table-wrap"><table class="smoothness-table">'
            '<thead><tr><th>Name</th><th>Score</th><th>Tier</th></tr></thead>'
            f'<tbody>{"".join(rows)}</tbody></table></div>'
            + paragraph(explainer.tier_block(last))
        )

    scoring_section = section("scoring-logic-heading", "How the Smoothness Score is calculated",
                              paragraph(explainer.scoring_logic(last)))

    last_starts_v = starts_with_vowel(last)
    phonetic_body = ''.join(
        f'<h3>{PHONETIC_HEADINGS[block]}</h3>'
        + paragraph(explainer.phonetic_block(block, last, last_syl, last_starts_v))
        for block in phonetic_block_order(last)
    )
    phonetic_section = section("phonetic-heading", f"Phonetic breakdown for {last}", phonetic_body)
    why_section = section("why-smoothness-heading", "Why smoothness matters",
                          paragraph(explainer.why_it_matters(last)))

    if block_order(last) == 'A':
        explained = [score_section, scoring_section, phonetic_section, why_section]
    else:
        explained = [score_section, phonetic_section, scoring_section, why_section]

    intro = paragraph(explainer.intro(last, last_syl))
    how_to = section("how-to-choose-heading", f"How to Choose a Name That Flows With {last}",
                     paragraph(explainer.how_to_choose(last)))
    closing = paragraph(explainer.closing(last))
    browse = [gender_section(), country_section(), alphabet_section(), core_links_section()]

    def assemble(filler: str = '') -> str:
        parts = [f'<h1>Baby Names That Go With {last_esc}</h1>', intro, filler]
        parts += list_sections + explained + [how_to, closing] + browse
        return '\n    '.join(p for p in parts if p)

    main_content = assemble()
    if count_words(main_content) < thresholds.min_words:
        filler = section("why-name-flow-heading", "Why Name Flow Matters",
                         paragraph(explainer.why_name_flow(last)))
        main_content = assemble(filler)
        logger.debug(f"{path_segment}: added name flow block ({count_words(main_content)} words)")

    breadcrumb = [
        {'name': 'Home', 'url': '/'},
        {'name': 'Baby Names', 'url': '/names'},
        {'name': f'Last Name {last}', 'url': path_segment},
    ]
    html = base_layout(
        title=f"Baby Names That Go With {last}: Best First Name Pairings | {get_setting('site.host', '')}",
        description=(f"Discover baby names that pair naturally with the last name {last}. Explore boy, "
                     f"girl, and gender-neutral options with balanced rhythm and flow."),
        path_segment=path_segment,
        breadcrumb=breadcrumb,
        main_content=main_content,
    )

    name_links = count_name_links(html)
    if name_links < thresholds.min_links:
        raise ThinContentError(path_segment, INTERNAL_LINKS, name_links, thresholds.min_links)
    return _finish(path_segment, html, SURNAME, thresholds)


def build_surname_pages(dataset, surnames: Optional[Sequence] = None, batch: Optional[int] = None,
                        explainer: Optional[CompatibilityExplainer] = None,
                        thresholds: Optional[PageThresholds] = None) -> List[PageResult]:
    """Build a batch of surname pages; the first failure aborts the batch."""
    if surnames is None:
        surnames = get_setting("pages.surnames", []) or [s.name for s in dataset.surnames]
    size = cap_batch(batch, "pages.surname_batch", "pages.max_batch", 20, 50)
    explainer = explainer or CompatibilityExplainer()
    pages = [build_surname_page(s, dataset.names, explainer=explainer, thresholds=thresholds)
             for s in list(surnames)[:size]]
    logger.info(f"Built {len(pages)} surname pages")
    return pages


# =============================================================================
# Sibling Pages
# =============================================================================

def _weights_summary(weights: Dict[str, int]) -> str:
    labels = (
        ("origin", "shared origin"),
        ("phonetic", "phonetic rhythm"),
        ("popularity_band", "popularity band"),
        ("length_balance", "length balance"),
        ("style_cluster", "style cluster"),
    )
    parts = [f"{label} ({weights[key]}%)" for key, label in labels]
    return ', '.join(parts[:-1]) + f", and {parts[-1]}"


def build_sibling_page(base, dataset, scorer: Optional[SiblingHarmonyScorer] = None,
                       explainer: Optional[SiblingExplainer] = None,
                       thresholds: Optional[PageThresholds] = None) -> PageResult:
    """
    Build /names/<name>/siblings/ for one base name.

    Shows the top harmony matches as a table, the names that clash with
    the base name, and the rendered sibling explanation blocks. A tips
    block is appended when the page is under its word floor.
    """
    scorer = scorer or SiblingHarmonyScorer.from_dataset(dataset)
    explainer = explainer or SiblingExplainer()
    thresholds = thresholds or thresholds_for(SIBLING)
    weights = harmony_weights()

    base_name = base.name
    name_esc = html_escape(base_name)
    key = slug(base_name)
    path_segment = f"/names/{key}/siblings/"

    matches = scorer.top_matches(base, dataset.names)
    clashing = scorer.clashing(base, dataset.names)
    ctx = build_sibling_context(base, dataset)

    rows = ''.join(
        f'<tr><td>{name_link(m.record)}</td><td class="smoothness-score">{m.score}</td>'
        f'<td>{html_escape(m.shared_origin) or "-"}</td><td>{html_escape(m.style_match) or "-"}</td></tr>'
        for m in matches
    )
    table_section = section(
        "harmony-heading", "Sibling Harmony Table",
        f'<p class="contextual">The following names score highest for sibling compatibility with '
        f'{name_esc}, based on {_weights_summary(weights)}.</p>'
        '<div class="score-table-wrap"><table class="smoothness-table">'
        '<thead><tr><th>Candidate</th><th>Harmony Score</th><th>Shared Origin</th><th>Style Match</th></tr></thead>'
        f'<tbody>{rows}</tbody></table></div>'
    )

    factor_items = (
        (f"Shared origin ({weights['origin']}%)", explainer.origin(base_name, ctx)),
        (f"Phonetic rhythm ({weights['phonetic']}%)", explainer.rhythm(base_name, ctx)),
        (f"Popularity band ({weights['popularity_band']}%)", explainer.popularity(base_name, ctx)),
        (f"Length balance ({weights['length_balance']}%) and style cluster ({weights['style_cluster']}%)",
         explainer.length_style(base_name, ctx)),
    )
    factors = ''.join(f'<li><strong>{label}:</strong> {html_escape(text)}</li>' for label, text in factor_items)
    how_section = section(
        "how-harmony-heading", "How sibling harmony is calculated",
        paragraph(explainer.how_harmony_intro(base_name, ctx))
        + f'<ul class="name-list">{factors}</ul>'
        + paragraph(explainer.deterministic_close(base_name, ctx))
    )

    score_range = f"{matches[0].score}-{matches[-1].score}" if matches else "0-100"
    calculate_section = section(
        "calculate-heading", "How we calculate sibling harmony",
        f'<p class="contextual">The harmony score is a weighted sum of five factors, each scored from 0 to 100 '
        f'and combined with fixed weights: {_weights_summary(weights)}. Two names with the same origin score '
        f'full marks on origin; names with different or unknown origins score nothing there. Phonetic rhythm '
        f'rewards an equal or close syllable count and adds a small bonus when both names start with the same '
        f'letter. Popularity band compares usage tiers (top 100, top 500, top 1000, or other), so names that '
        f'feel equally familiar score higher. Length balance favours names of similar length, and style cluster '
        f'rewards names that share a primary style category. The same two names always produce the same '
        f'score. For {name_esc}, the table above shows scores from {score_range}.</p>'
    )

    letters = sorted({(m.record.first_letter or m.record.name[:1]).upper() for m in matches if m.record.name})
    if matches:
        avg_syl = sum(record_syllables(m.record) for m in matches) / len(matches)
        avg_text = f"{avg_syl:.1f}"
    else:
        avg_text = ctx['BASE_SYL']
    cohesion_section = section(
        "cohesion-heading", "Stylistic cohesion across siblings",
        f'<p class="contextual">Some parents want matching initials, such as {name_esc} and a sibling starting '
        f'with {html_escape(ctx["BASE_FIRST_LETTER"])}; others prefer variety. The top candidates here start '
        f'with {len(letters)} different letters, so the table covers both approaches. {name_esc} has '
        f'{ctx["BASE_SYL"]} syllable{ctx["BASE_SYL_PLURAL"]} and {html_escape(ctx["BASE_ORIGIN"])} roots; the '
        f'suggested names average about {avg_text} syllables, which keeps the set balanced without one name '
        f'dominating. Popularity band reflects generational naming patterns: names in similar usage tiers often '
        f'feel like they belong to the same era, which helps a sibling set feel intentional.</p>'
    )

    if clashing:
        clash_items = ''.join(f'<li>{name_link(n)}</li>' for n in clashing)
    else:
        clash_items = '<li>Names with very different syllable counts, origins, and styles typically clash.</li>'
    contrast_section = section(
        "contrast-heading", f"Names that clash stylistically with {base_name}",
        paragraph(explainer.contrast(base_name, ctx))
        + f'<ul class="name-list">{clash_items}</ul>'
        + '<p class="contextual">These names are not bad choices; they simply have different '
          'characteristics. Parents who want a cohesive sibling set often avoid pairing very contrasting '
          'names.</p>'
    )

    why_section = section(
        "why-harmony-heading", "Why sibling harmony matters",
        paragraph(explainer.why_harmony(base_name, ctx))
        + f'<p class="contextual">Try the <a href="/names/with-last-name{EXT}">last name compatibility</a> '
          f'pages to hear how {name_esc} sounds with your surname, or open any name in the table for its '
          f'meaning, origin, and popularity.</p>'
    )
    related_section = section(
        "mesh-heading", "Related",
        f'<p><a href="{name_path(base_name)}">{name_esc}: full profile</a> · '
        f'<a href="/baby-names-with-smith/">How {name_esc} sounds with Smith</a> · '
        f'<a href="/names/popular{EXT}">Popular names</a></p>'
    )

    summary = paragraph(explainer.summary_intro(base_name, ctx))
    parts = [f'<h1>Sibling names that pair well with {name_esc}</h1>', summary, table_section,
             how_section, calculate_section, cohesion_section, contrast_section, why_section,
             gender_section(), country_section(), core_links_section(), related_section]
    main_content = '\n    '.join(p for p in parts if p)
    if count_words(main_content) < thresholds.min_words:
        main_content += '\n    ' + section("tips-heading", "Tips for choosing sibling names",
                                           paragraph(explainer.tips(base_name, ctx)))

    breadcrumb = [
        {'name': 'Home', 'url': '/'},
        {'name': 'Baby Names', 'url': '/names'},
        {'name': base_name, 'url': name_path(base_name)},
        {'name': 'Sibling names', 'url': path_segment},
    ]
    html = base_layout(
        title=f"Sibling names for {base_name}: Sibling Harmony | {get_setting('site.host', '')}",
        description=(f"Sibling names that pair well with {base_name}. Harmony scores, shared origin, "
                     f"style match. Top {len(matches)} compatible sibling names."),
        path_segment=path_segment,
        breadcrumb=breadcrumb,
        main_content=main_content,
    )
    return _finish(path_segment, html, SIBLING, thresholds)


def top_popular_names(dataset, limit: int, country: Optional[str] = None) -> List:
    """
    Most popular names in the latest year recorded for ``country``.

    When the popularity data covers fewer than ``limit`` names, the rest
    are filled from the names list in order.
    """
    country = country or get_setting("pages.sibling_country", "USA")
    rows = [r for r in dataset.popularity if r.country == country and r.rank is not None]
    latest = max((r.year or 0 for r in rows), default=0)
    rows = sorted((r for r in rows if (r.year or 0) == latest), key=lambda r: r.rank)
    by_id = {n.id: n for n in dataset.names}
    chosen, seen = [], set()
    for row in rows:
        record = by_id.get(row.name_id)
        if record is not None and record.id not in seen:
            chosen.append(record)
            seen.add(record.id)
        if len(chosen) >= limit:
            return chosen
    for record in dataset.names:
        if len(chosen) >= limit:
            break
        if record.id not in seen:
            chosen.append(record)
            seen.add(record.id)
    return chosen


def build_sibling_pages(dataset, batch: Optional[int] = None,
                        explainer: Optional[SiblingExplainer] = None,
                        thresholds: Optional[PageThresholds] = None) -> List[PageResult]:
    """Sibling pages for the most popular names; the first failure aborts the batch."""
    size = cap_batch(batch, "pages.sibling_batch", "pages.sibling_max_batch", 150, 150)
    scorer = SiblingHarmonyScorer.from_dataset(dataset)
    explainer = explainer or SiblingExplainer()
    pages = [build_sibling_page(base, dataset, scorer=scorer, explainer=explainer, thresholds=thresholds)
             for base in top_popular_names(dataset, size)]
    logger.info(f"Built {len(pages)} sibling pages")
    return pages


# =============================================================================
# Output
# =============================================================================

def write_pages(pages: Sequence[PageResult], out_dir,
                thresholds: Optional[PageThresholds] = None) -> List[Path]:
    """
    Write pages under ``out_dir`` through the content guard.

    Every page is re-checked against ``thresholds`` (or its page type's
    minimums) before any of them touches the disk, so a failing page
    leaves the output directory unchanged.
    """
    out_dir = Path(out_dir)
    checked = []
    for page in pages:
        limits = thresholds or thresholds_for(page.page_type)
        assert_page_thresholds(page.html, page_id=page.path_segment, thresholds=limits)
        checked.append((page, limits))
    written = []
    for page, limits in checked:
        path = write_html_with_guard(out_dir / page.relative_path, page.html,
                                     page_id=page.path_segment, thresholds=limits)
        written.append(path)
    logger.info(f"Wrote {len(written)} pages to {out_dir}")
    return written
