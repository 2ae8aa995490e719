"""Unit tests for the Org outline engine."""

import pytest

from quire.engines.org import OrgEngine, parse_outline, render_inline


@pytest.fixture
def engine() -> OrgEngine:
    return OrgEngine()


class TestParseOutline:
    """Tests for headline structure."""

    def test_numbers_headlines_in_document_order(self) -> None:
        preamble, roots = parse_outline("* a\n** b\n*** c\n* d\n")

        assert preamble == []
        assert [h.number for h in roots] == [1, 4]
        assert roots[0].children[0].number == 2
        assert roots[0].children[0].children[0].number == 3

    def test_lines_before_first_headline_are_preamble(self) -> None:
        preamble, roots = parse_outline("intro\n* a\nbody\n")

        assert preamble == ["intro"]
        assert roots[0].lines == ["body"]

    def test_skipped_level_nests_under_previous(self) -> None:
        _, roots = parse_outline("* a\n*** deep\n** b\n")

        assert [h.title for h in roots[0].children] == ["deep", "b"]

    def test_strips_headline_tags(self) -> None:
        _, roots = parse_outline("* Title   :draft:web:\n")

        assert roots[0].title == "Title"

    def test_bold_line_is_not_a_headline(self) -> None:
        preamble, roots = parse_outline("*bold* start\n")

        assert roots == []
        assert preamble == ["*bold* start"]


class TestOrgEngine:
    """Tests for OrgEngine.render."""

    def test_nested_headlines_and_list(self, engine: OrgEngine, org_expected: str) -> None:
        body = "#+OPTIONS: toc:nil num:nil\n* My title\n** my Subtitle\n- list 1\n- list 2\n"

        assert engine.render(body, {}) == org_expected

    def test_output_extension(self, engine: OrgEngine) -> None:
        assert engine.output_extension == ".html"

    def test_sibling_headlines(self, engine: OrgEngine) -> None:
        html = engine.render("* one\n* two\n", {})

        assert html == (
            '<div id="outline-container-headline-1" class="outline-2">\n'
            '<h2 id="headline-1">\none\n</h2>\n'
            '<div id="outline-text-headline-1" class="outline-text-2">\n'
            "</div>\n</div>\n"
            '<div id="outline-container-headline-2" class="outline-2">\n'
            '<h2 id="headline-2">\ntwo\n</h2>\n'
            '<div id="outline-text-headline-2" class="outline-text-2">\n'
            "</div>\n</div>\n"
        )

    def test_paragraph(self, engine: OrgEngine) -> None:
        assert engine.render("first line\nsecond line\n\nnext\n", {}) == (
            "<p>\nfirst line\nsecond line\n</p>\n<p>\nnext\n</p>\n"
        )

    def test_nested_list(self, engine: OrgEngine) -> None:
        html = engine.render("- a\n  - a.1\n  - a.2\n- b\n", {})

        assert html == (
            "<ul>\n"
            "<li>a\n<ul>\n<li>a.1</li>\n<li>a.2</li>\n</ul>\n</li>\n"
            "<li>b</li>\n"
            "</ul>\n"
        )

    def test_ordered_list(self, engine: OrgEngine) -> None:
        assert engine.render("1. one\n2) two\n", {}) == "<ol>\n<li>one</li>\n<li>two</li>\n</ol>\n"

    def test_list_item_continuation(self, engine: OrgEngine) -> None:
        assert engine.render("- first\n  continued\n", {}) == "<ul>\n<li>first continued</li>\n</ul>\n"

    def test_keywords_and_comments_are_dropped(self, engine: OrgEngine) -> None:
        assert engine.render("#+TITLE: x\n# a comment\n#+OPTIONS: toc:nil\n", {}) == ""

    def test_src_block(self, engine: OrgEngine) -> None:
        html = engine.render("#+BEGIN_SRC python\nif a < b:\n    pass\n#+END_SRC\n", {})

        assert html == (
            '<div class="src src-python">\n<pre>\nif a &lt; b:\n    pass\n</pre>\n</div>\n'
        )

    def test_example_block(self, engine: OrgEngine) -> None:
        html = engine.render("#+begin_example\n* not a headline\n#+end_example\n", {})

        assert html == '<pre class="example">\n* not a headline\n</pre>\n'

    def test_quote_block(self, engine: OrgEngine) -> None:
        html = engine.render("#+BEGIN_QUOTE\nwise words\n#+END_QUOTE\n", {})

        assert html == "<blockquote>\n<p>\nwise words\n</p>\n</blockquote>\n"

    def test_horizontal_rule(self, engine: OrgEngine) -> None:
        assert engine.render("-----\n", {}) == "<hr>\n"

    def test_context_is_ignored(self, engine: OrgEngine) -> None:
        body = "* {{ page.title }}\n"

        assert engine.render(body, {"page": {"title": "x"}}) == engine.render(body, {})

    def test_escapes_html(self, engine: OrgEngine) -> None:
        assert engine.render("a <b> & c\n", {}) == "<p>\na &lt;b&gt; &amp; c\n</p>\n"

    def test_deep_headline_tag_is_capped(self, engine: OrgEngine) -> None:
        html = engine.render("****** six\n", {})

        assert '<h6 id="headline-1">' in html
        assert 'class="outline-7"' in html


class TestRenderInline:
    """Tests for inline markup."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("*bold*", "<strong>bold</strong>"),
            ("/italic/", "<em>italic</em>"),
            ("=code=", "<code>code</code>"),
            ("~verb~", "<code>verb</code>"),
            ("a *b /c/* d", "a <strong>b <em>c</em></strong> d"),
            ("2*3*4", "2*3*4"),
        ],
    )
    def test_emphasis(self, text: str, expected: str) -> None:
        assert render_inline(text) == expected

    def test_link_with_description(self) -> None:
        html = render_inline("see [[https://example.com/a?x=1&y=2][the *docs*]]")

        assert html == 'see <a href="https://example.com/a?x=1&amp;y=2">the <strong>docs</strong></a>'

    def test_bare_link(self) -> None:
        assert render_inline("[[https://example.com]]") == (
            '<a href="https://example.com">https://example.com</a>'
        )

    def test_image_link(self) -> None:
        assert render_inline("[[img/cat.png]]") == (
            '<img src="img/cat.png" alt="img/cat.png" title="img/cat.png" />'
        )

    def test_url_slashes_are_not_italic(self) -> None:
        assert render_inline("http://example.com/path/") == "http://example.com/path/"
