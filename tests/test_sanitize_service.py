"""
Tests para backend/app/services/sanitize.py
Sanitización con lista permitida y escape de HTML.
"""
import itertools

import pytest
from backend.app.services.policy import SanitizePolicy
from backend.app.services.sanitize import escape_html, sanitize_html

_FRAGMENTS = (
    "<b>", "</b>", "<pre>", "</pre>", "<div>", "</div>", "<table>", "<textarea>",
    "<svg>", "<plaintext>", "<script>", "<p>", '<a href="javascript:x">', "x", "&", "<",
)


class TestSanitizeHtml:
    """Tests para sanitize_html."""

    def test_script_removed_bold_kept(self):
        result = sanitize_html("<script>alert(1)</script><b>hi</b>")
        assert "<b>hi</b>" in result
        assert "<script" not in result
        assert "</script>" not in result

    def test_allowed_formatting_tags_survive(self):
        dirty = "<p>uno<br>dos</p><ul><li><i>a</i></li></ul><code>x</code>"
        result = sanitize_html(dirty)
        for tag in ("<p>", "<br>", "<ul>", "<li>", "<i>", "<code>"):
            assert tag in result

    def test_event_handler_attributes_removed(self):
        result = sanitize_html('<b onclick="alert(1)">x</b><img src=x onerror=alert(1)>')
        assert "onclick" not in result
        assert "onerror" not in result
        assert "<img" not in result
        assert "<b>x</b>" in result

    def test_safe_link_attributes_kept(self):
        result = sanitize_html(
            '<a href="https://example.com" target="_blank" rel="noopener" style="color:red">ok</a>'
        )
        assert 'href="https://example.com"' in result
        assert 'target="_blank"' in result
        assert 'rel="noopener"' in result
        assert "style" not in result

    @pytest.mark.parametrize(
        "href",
        ["javascript:alert(1)", "JaVaScRiPt:alert(1)", "data:text/html;base64,PHNjcmlwdD4=", "vbscript:x"],
    )
    def test_dangerous_schemes_dropped(self, href):
        result = sanitize_html(f'<a href="{href}">x</a>')
        assert "href" not in result
        assert ">x</a>" in result

    def test_mailto_allowed(self):
        assert 'href="mailto:ana@mail.com"' in sanitize_html('<a href="mailto:ana@mail.com">m</a>')

    def test_href_not_allowed_on_other_tags(self):
        assert sanitize_html('<b href="https://example.com">x</b>') == "<b>x</b>"

    def test_comments_removed(self):
        assert sanitize_html("a<!-- <script>x</script> -->b") == "ab"

    def test_empty_and_absent_input(self):
        assert sanitize_html("") == ""
        assert sanitize_html(None) == ""

    def test_plain_text_unchanged(self):
        assert sanitize_html("Hola mundo") == "Hola mundo"

    def test_custom_policy(self):
        policy = SanitizePolicy(tags=frozenset({"b"}), attributes=(), protocols=frozenset({"https"}))
        assert sanitize_html("<b>x</b><i>y</i>", policy) == "<b>x</b>y"

    @pytest.mark.parametrize(
        "dirty",
        [
            "<script>alert(1)</script><b>hi</b>",
            '<a href="javascript:alert(1)" onclick="x">link</a>',
            "<div><p>texto <em>enfático</em></p></div>",
            "1 < 2 && 3 > 2",
            "&lt;b&gt; ya escapado &amp; más",
            "<b><i>sin cerrar",
            '<a href="https://example.com" target="_blank">ok</a>',
            "<style>body{}</style><u>u</u>",
            "<pre><div>code</div></pre>",
            "<pre><div>a</div></pre>",
            "<pre><table>",
            "<pre><pre><div>x</div></pre></pre>",
        ],
    )
    def test_idempotent(self, dirty):
        once = sanitize_html(dirty)
        assert sanitize_html(once) == once

    def test_idempotent_over_fragment_combinations(self):
        """Combinaciones de etiquetas sueltas, texto y caracteres especiales."""
        for size in (1, 2, 3):
            for parts in itertools.product(_FRAGMENTS, repeat=size):
                dirty = "".join(parts)
                once = sanitize_html(dirty)
                assert sanitize_html(once) == once, dirty
                assert "<script" not in once, dirty
                assert "<a href" not in once, dirty


class TestEscapeHtml:
    """Tests para escape_html."""

    def test_escapes_tag(self):
        assert escape_html("<b>") == "&lt;b&gt;"

    def test_escapes_all_significant_characters(self):
        assert escape_html("& < > \" '") == "&amp; &lt; &gt; &quot; &#039;"

    def test_ampersand_escaped_first(self):
        """Las entidades introducidas por el escape no se escapan de nuevo."""
        assert escape_html('"') == "&quot;"
        assert escape_html("<") == "&lt;"

    def test_not_idempotent(self):
        assert escape_html(escape_html("<b>")) == "&amp;lt;b&amp;gt;"
        assert "&amp;lt;" in escape_html("&lt;")

    def test_absent_and_non_text(self):
        assert escape_html(None) == ""
        assert escape_html(5) == "5"

    def test_differs_from_sanitize(self):
        """Escapar y sanitizar no son intercambiables."""
        assert escape_html("<b>hi</b>") == "&lt;b&gt;hi&lt;/b&gt;"
        assert sanitize_html("<b>hi</b>") == "<b>hi</b>"
