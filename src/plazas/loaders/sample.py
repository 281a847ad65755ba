"""
Problema de ejemplo: 10 postulantes y 4 programas (cupos 2, 3, 4 y 2).
"""

import json
from importlib import resources

from plazas.loaders.json_loader import parse_problem
from plazas.models import MatchingProblem

SAMPLE_FILE = "sample.json"


def sample_problem() -> MatchingProblem:
    """Devuelve el problema de ejemplo empaquetado en plazas/loaders/data."""
    data_file = resources.files("plazas.loaders").joinpath("data").joinpath(SAMPLE_FILE)
    return parse_problem(json.loads(data_file.read_text(encoding="utf-8")), source=SAMPLE_FILE)
