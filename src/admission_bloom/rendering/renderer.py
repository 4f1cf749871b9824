"""
Markdown rendering for model output.

Model output is untrusted: raw HTML is escaped, never passed through, and
markdown-it's link validation drops javascript:/vbscript:/file: targets.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token


@dataclass(frozen=True)
class RenderedDocument:
    """Structured, display-ready form of a Markdown answer."""
    source: str
    html: str
    headings: Tuple[Tuple[int, str], ...] = ()

    def has_heading(self, level: int = 1) -> bool:
        return any(h_level == level for h_level, _ in self.headings)

    @property
    def title(self) -> Optional[str]:
        """Text of the first top-level heading, if any."""
        for level, text in self.headings:
            if level == 1:
                return text
        return None


class ResultRenderer:
    """
    Renders the lightweight markup returned by the model.
    
    A pure function of the text: same input, same RenderedDocument.
    """

    def __init__(self):
        self._md = MarkdownIt("commonmark", {"html": False}).enable("table")

    def render(self, text: str) -> RenderedDocument:
        """
        Render Markdown to HTML without interpreting embedded markup.
        
        :param text: Markdown answer from the model
        :return: RenderedDocument with HTML and the heading outline
        """
        text = text or ""
        env: dict = {}
        tokens = self._md.parse(text, env)
        html = self._md.renderer.render(tokens, self._md.options, env)
        return RenderedDocument(
            source=text,
            html=html,
            headings=self._collect_headings(tokens),
        )

    @staticmethod
    def _collect_headings(tokens: list) -> Tuple[Tuple[int, str], ...]:
        headings = []
        for i, token in enumerate(tokens):
            if token.type != "heading_open":
                continue
            inline: Optional[Token] = tokens[i + 1] if i + 1 < len(tokens) else None
            text = inline.content.strip() if inline is not None else ""
            headings.append((int(token.tag[1:]), text))
        return tuple(headings)


_default_renderer = ResultRenderer()


def render_markdown(text: str) -> RenderedDocument:
    """Render with the shared default renderer."""
    return _default_renderer.render(text)
