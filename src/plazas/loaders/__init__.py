"""
Carga de problemas de matching.

Provee lectura/escritura JSON, armado desde mapas planos y el problema
de ejemplo empaquetado.
"""

from plazas.loaders.json_loader import load_problem, parse_problem, save_problem
from plazas.loaders.mappings import problem_from_mappings
from plazas.loaders.sample import sample_problem

__all__ = [
    "load_problem",
    "parse_problem",
    "problem_from_mappings",
    "save_problem",
    "sample_problem",
]
