"""
Carga de problemas desde los mapas planos que recibe `solve`.
"""

from collections.abc import Mapping, Sequence

import structlog

from plazas.models import MatchingProblem
from plazas.models.problem import ProgramInput

logger = structlog.get_logger()


def problem_from_mappings(
    applicants: Mapping[str, Sequence[str]],
    programs: Mapping[str, ProgramInput],
) -> MatchingProblem:
    """
    Construye un MatchingProblem desde mapas planos.

    Args:
        applicants: postulante -> programas en orden de preferencia
        programs: programa -> Program, (preferencias, cupo) o
            {"preferences": [...], "capacity": n}

    Returns:
        MatchingProblem (sin validar referencias; eso lo hace el motor)

    Raises:
        InvalidInputError: si algún valor no tiene la forma esperada
    """
    problem = MatchingProblem.from_mappings(applicants, programs)

    logger.debug(
        "Problema armado desde mapas",
        applicants=len(problem.applicants),
        programs=len(problem.programs),
    )
    return problem
