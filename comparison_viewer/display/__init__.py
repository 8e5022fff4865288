"""
Display - Data handed to the drawing surface
"""

from .render_plan import RenderLayer, RenderPlan, build_render_plan, compose_filter

__all__ = ['RenderLayer', 'RenderPlan', 'build_render_plan', 'compose_filter']
