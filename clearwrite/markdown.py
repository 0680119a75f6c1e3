"""Best-effort markdown to HTML for the workbench output panel.

This is an ordered chain of regex substitutions, not a markdown parser. The
order matters: italics run after bold so ``**`` pairs are not consumed as two
italic markers, and headings run from ``###`` down to ``#`` so the level one
pattern never sees the hashes of a deeper heading. Nested emphasis and
malformed input are not guaranteed to render well.
"""

import re

from markupsafe import Markup, escape

_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"^- (.*)$", re.MULTILINE), "<li>\N{BULLET} \\1</li>"),
    (re.compile(r"^\d+\. (.*)$", re.MULTILINE), r"<li>\1</li>"),
)


def render_markdown(text: str, *, escape_html: bool = True) -> Markup:
    """Render ``text`` as an HTML fragment wrapped in a single paragraph.

    With ``escape_html`` (the default) any HTML already in ``text`` is escaped
    before the patterns run. Pass ``False`` to insert it verbatim.
    """
    html = str(escape(text)) if escape_html else text
    for pattern, replacement in _SUBSTITUTIONS:
        html = pattern.sub(replacement, html)
    html = html.replace("\n\n", "</p><p>")
    return Markup(f"<p>{html}</p>")
