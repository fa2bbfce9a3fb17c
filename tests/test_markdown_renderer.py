from __future__ import annotations

from swipe_quiz.core.markdown_renderer import MarkdownRenderer


def test_prompt_renders_inline():
    renderer = MarkdownRenderer()
    assert renderer.render_prompt("  Do you like **speed**?  ") == "Do you like <strong>speed</strong>?"


def test_prompt_escapes_raw_html():
    renderer = MarkdownRenderer()
    assert "<script>" not in renderer.render_prompt("<script>alert(1)</script>")


def test_description_renders_paragraphs():
    renderer = MarkdownRenderer()
    assert renderer.render_description("Fast and ~~unsafe~~ safe.") == "<p>Fast and <s>unsafe</s> safe.</p>\n"


def test_blank_description_renders_nothing():
    assert MarkdownRenderer().render_description("   ") == ""
