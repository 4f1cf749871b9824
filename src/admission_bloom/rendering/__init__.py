from .renderer import RenderedDocument, ResultRenderer, render_markdown

__all__ = ["RenderedDocument", "ResultRenderer", "render_markdown"]
