"""Markdown → HTML for article bodies.

Bodies are author-supplied, so the rendered HTML is passed through nh3
before it reaches a page: raw ``<script>``, event-handler attributes and
``javascript:`` links are stripped.
"""

import markdown as markdown_lib
import nh3


def render_markdown(text: str | None) -> str:
    if not text:
        return ""
    html = markdown_lib.markdown(
        text,
        extensions=["extra", "nl2br", "sane_lists"],
        output_format="html",
    )
    return nh3.clean(html)
