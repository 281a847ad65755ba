"""
Verificación de estabilidad de una asignación.

Un par (postulante A, programa P) es bloqueante si:
- A rankea a P por encima de su asignación actual (o A no tiene asignación)
- P rankea a A y tiene un lugar libre o un admitido que prefiere menos que A
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import structlog

from plazas.exceptions import InvalidAssignmentError
from plazas.matching.validation import validate_problem
from plazas.models import MatchingProblem

logger = structlog.get_logger()


@dataclass(frozen=True)
class BlockingPair:
    """Par postulante-programa que se prefieren mutuamente."""

    applicant: str
    program: str


def check_assignment(
    problem: MatchingProblem,
    assignment: Mapping[str, Sequence[str]],
) -> dict[str, str]:
    """
    Verifica cupos, exclusividad y que cada admisión sea aceptable para ambos.

    Returns:
        Mapa postulante -> programa asignado

    Raises:
        InvalidInputError: si el problema en sí no es válido
        InvalidAssignmentError: ante la primera violación encontrada
    """
    validate_problem(problem)

    applicants = problem.applicants_by_id()
    programs = problem.programs_by_id()
    matched_to: dict[str, str] = {}

    for program_id, admitted in assignment.items():
        program = programs.get(program_id)
        if program is None:
            raise InvalidAssignmentError(f"Programa desconocido en la asignación: '{program_id}'")

        if len(admitted) > program.capacity:
            raise InvalidAssignmentError(
                f"El programa '{program_id}' tiene {len(admitted)} admitidos "
                f"y cupo {program.capacity}"
            )

        for applicant_id in admitted:
            applicant = applicants.get(applicant_id)
            if applicant is None:
                raise InvalidAssignmentError(
                    f"Postulante desconocido en '{program_id}': '{applicant_id}'"
                )
            if applicant_id in matched_to:
                raise InvalidAssignmentError(
                    f"El postulante '{applicant_id}' está asignado a "
                    f"'{matched_to[applicant_id]}' y a '{program_id}'"
                )
            if applicant.rank_of(program_id) is None or program.rank_of(applicant_id) is None:
                raise InvalidAssignmentError(
                    f"'{applicant_id}' y '{program_id}' no se rankean mutuamente"
                )
            matched_to[applicant_id] = program_id

    return matched_to


def find_blocking_pairs(
    problem: MatchingProblem,
    assignment: Mapping[str, Sequence[str]],
) -> list[BlockingPair]:
    """
    Lista los pares bloqueantes de una asignación.

    Una asignación sin pares bloqueantes es estable.
    """
    matched_to = check_assignment(problem, assignment)
    programs = problem.programs_by_id()
    blocking: list[BlockingPair] = []

    for applicant in problem.applicants:
        current = matched_to.get(applicant.id)
        limit = applicant.rank_of(current) if current is not None else len(applicant.preferences)

        for program_id in applicant.preferences[:limit]:
            program = programs[program_id]
            rank = program.rank_of(applicant.id)
            if rank is None:
                continue

            admitted = assignment.get(program_id, ())
            if len(admitted) < program.capacity:
                blocking.append(BlockingPair(applicant.id, program_id))
                continue

            worst = max(program.rank_of(a) for a in admitted)
            if rank < worst:
                blocking.append(BlockingPair(applicant.id, program_id))

    if blocking:
        logger.warning("Asignación inestable", blocking_pairs=len(blocking))

    return blocking


def is_stable(problem: MatchingProblem, assignment: Mapping[str, Sequence[str]]) -> bool:
    return not find_blocking_pairs(problem, assignment)
