from .report import render_plan, render_preview, render_result

__all__ = ["render_plan", "render_preview", "render_result"]
