"""
Motor de matching.

Deferred acceptance con cupos: los postulantes se postulan en orden de
preferencia y los programas retienen a sus preferidos hasta llenar el cupo.
"""

from plazas.matching.engine import MatchingEngine, solve
from plazas.matching.stability import (
    BlockingPair,
    check_assignment,
    find_blocking_pairs,
    is_stable,
)
from plazas.matching.validation import validate_problem

__all__ = [
    "MatchingEngine",
    "solve",
    "BlockingPair",
    "check_assignment",
    "find_blocking_pairs",
    "is_stable",
    "validate_problem",
]
