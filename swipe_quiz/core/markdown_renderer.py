"""Markdown rendering helpers for card prompts and language descriptions.

Catalog strings are treated as opaque markdown; the renderer only turns them
into HTML for the web page. Raw HTML inside catalog text is escaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Renders catalog text for the quiz page."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": self.enable_html}).enable("strikethrough")

    def render_prompt(self, prompt: str) -> str:
        """Render a card prompt as inline HTML so it sits directly inside the card."""
        return self._markdown.renderInline(prompt.strip())

    def render_description(self, description: str) -> str:
        """Render a language description as a block of HTML paragraphs."""
        cleaned = description.strip()
        if not cleaned:
            return ""
        return self._markdown.render(cleaned)


renderer = MarkdownRenderer()
