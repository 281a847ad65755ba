"""
Reportes de la asignación final (texto y JSON).
"""

from plazas.report.renderer import render_json, render_text

__all__ = [
    "render_json",
    "render_text",
]
