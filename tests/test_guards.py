"""
Tests for Content-Floor Guards
==============================
Tests for word/link counting and the guarded writer in nameorigin/guards.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nameorigin.guards import (
    INTERNAL_LINKS,
    META_DESCRIPTION,
    WORDS,
    PageThresholds,
    ThinContentError,
    assert_page_thresholds,
    count_internal_links,
    count_words,
    has_meta_description,
    main_content_text,
    thresholds_for,
    write_html_with_guard,
)

HOST = "nameorigin.io"
DESCRIPTION = '<meta name="description" content="Baby names that pair well.">'


def make_page(words: int, links: int, description: str = DESCRIPTION) -> str:
    """Page with ``words`` words inside <main> and ``links`` internal links in the nav."""
    nav = ''.join(f'<a href="/name/n{i}/"></a>' for i in range(links))
    body = ' '.join(['word'] * words)
    return (f"<html><head>{description}</head><body>"
            f"<nav>{nav}</nav><main><p>{body}</p></main></body></html>")


class TestMeasurements:
    """Tests for the counting helpers."""

    def test_words_only_in_main(self):
        """Navigation and footer text are not counted."""
        html = "<header>one two three</header><main><p>four five</p></main><footer>six</footer>"
        assert count_words(html) == 2

    def test_words_without_main(self):
        """Without a <main> element the whole document is counted."""
        assert count_words("<div>one <b>two</b> three</div>") == 3

    def test_scripts_and_styles_ignored(self):
        html = "<main><script>var a = 1;</script><style>p { x: y }</style><p>hello there</p></main>"
        assert main_content_text(html) == "hello there"

    def test_empty_input(self):
        assert count_words("") == 0
        assert count_words(None) == 0
        assert count_internal_links(None, HOST) == 0

    def test_internal_links(self):
        """Root-relative and same-host links count; others do not."""
        html = ('<a href="/names/">a</a>'
                '<a class="x" href="https://nameorigin.io/name/emma/">b</a>'
                "<a href='/baby-names-with-smith/'>c</a>"
                '<a href="https://example.com/">d</a>'
                '<a href="mailto:hi@example.com">e</a>')
        assert count_internal_links(html, HOST) == 3

    def test_internal_links_default_host(self):
        """The configured site host is used when none is given."""
        assert count_internal_links('<a href="https://nameorigin.io/x/">x</a>') == 1

    def test_meta_description_attribute_order(self):
        """name/content in either order is recognised."""
        assert has_meta_description('<meta name="description" content="Hi">')
        assert has_meta_description('<meta content="Hi" name="description">')

    def test_meta_description_empty(self):
        assert not has_meta_description('<meta name="description" content="  ">')
        assert not has_meta_description('<meta name="keywords" content="names">')


class TestThresholds:
    """Tests for thresholds_for."""

    def test_surname(self):
        limits = thresholds_for("surname")
        assert limits.min_words == 600
        assert limits.min_links == 12
        assert limits.require_description

    def test_sibling(self):
        limits = thresholds_for("sibling")
        assert (limits.min_words, limits.min_links) == (700, 15)

    def test_unknown_type_uses_default(self):
        limits = thresholds_for("glossary")
        assert (limits.min_words, limits.min_links) == (400, 20)
        assert thresholds_for() == limits


class TestAssertPageThresholds:
    """Tests for assert_page_thresholds at the floor boundaries."""

    @pytest.fixture
    def limits(self):
        return PageThresholds(min_words=50, min_links=5)

    def test_exact_floor_passes(self, limits):
        """Exactly the minimum words and links is enough."""
        assert_page_thresholds(make_page(50, 5), "/p/", limits, host=HOST)

    def test_one_word_short(self, limits):
        with pytest.raises(ThinContentError) as excinfo:
            assert_page_thresholds(make_page(49, 5), "/p/", limits, host=HOST)
        assert excinfo.value.metric == WORDS
        assert excinfo.value.measured == 49
        assert excinfo.value.required == 50
        assert "/p/" in str(excinfo.value)

    def test_one_link_short(self, limits):
        with pytest.raises(ThinContentError) as excinfo:
            assert_page_thresholds(make_page(50, 4), "/p/", limits, host=HOST)
        assert excinfo.value.metric == INTERNAL_LINKS
        assert excinfo.value.measured == 4

    def test_words_checked_first(self, limits):
        """Word count is reported before links."""
        with pytest.raises(ThinContentError) as excinfo:
            assert_page_thresholds(make_page(0, 0), "/p/", limits, host=HOST)
        assert excinfo.value.metric == WORDS

    def test_missing_description(self, limits):
        with pytest.raises(ThinContentError) as excinfo:
            assert_page_thresholds(make_page(50, 5, description=""), "/p/", limits, host=HOST)
        assert excinfo.value.metric == META_DESCRIPTION
        assert "missing meta description" in str(excinfo.value)

    def test_description_optional(self):
        limits = PageThresholds(min_words=1, min_links=0, require_description=False)
        assert_page_thresholds(make_page(1, 0, description=""), thresholds=limits, host=HOST)

    def test_is_value_error(self, limits):
        with pytest.raises(ValueError):
            assert_page_thresholds("", "/p/", limits, host=HOST)


class TestWriteHtmlWithGuard:
    """Tests for write_html_with_guard."""

    def test_writes_passing_page(self, tmp_path):
        """A passing page is written, creating parent directories."""
        target = tmp_path / "names" / "emma" / "index.html"
        html = make_page(10, 2)
        written = write_html_with_guard(target, html, thresholds=PageThresholds(10, 2))
        assert written == target
        assert target.read_text(encoding="utf-8") == html

    def test_no_file_on_failure(self, tmp_path):
        """A thin page raises and leaves nothing on disk."""
        target = tmp_path / "thin" / "index.html"
        with pytest.raises(ThinContentError):
            write_html_with_guard(target, make_page(3, 2), thresholds=PageThresholds(10, 2))
        assert not target.exists()
        assert not target.parent.exists()

    def test_page_id_defaults_to_path(self, tmp_path):
        target = tmp_path / "index.html"
        with pytest.raises(ThinContentError) as excinfo:
            write_html_with_guard(target, make_page(1, 0), thresholds=PageThresholds(10, 0))
        assert excinfo.value.page_id == str(target)
