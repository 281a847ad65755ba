"""
plazas: asignación estable de postulantes a programas con cupo.
"""

__version__ = "0.1.0"
