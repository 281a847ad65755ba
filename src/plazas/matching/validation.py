"""
Validación de la entrada del motor.

Se chequea todo antes de crear estado: si algo falla se reportan
todos los problemas encontrados en un único error.
"""

from collections import Counter

import structlog

from plazas.exceptions import InvalidInputError, MalformedPreferenceError
from plazas.models import MatchingProblem

logger = structlog.get_logger()


def validate_problem(problem: MatchingProblem) -> None:
    """
    Verifica que el problema sea una entrada válida para el matching.

    Raises:
        MalformedPreferenceError: un identificador está declarado de ambos
            lados o un agente se incluye en su propia lista
        InvalidInputError: referencias a agentes no declarados, cupos no
            positivos, duplicados en una lista o identificadores repetidos
    """
    problems: list[str] = []
    malformed: list[str] = []

    applicant_ids = problem.applicant_ids
    program_ids = problem.program_ids

    for kind, ids in (("postulante", applicant_ids), ("programa", program_ids)):
        for identity, count in Counter(ids).items():
            if count > 1:
                problems.append(f"El {kind} '{identity}' está declarado {count} veces")
        if any(not identity for identity in ids):
            problems.append(f"Hay un {kind} con identificador vacío")

    declared_applicants = set(applicant_ids)
    declared_programs = set(program_ids)

    for identity in sorted(declared_applicants & declared_programs):
        malformed.append(f"'{identity}' está declarado como postulante y como programa")

    for applicant in problem.applicants:
        _check_list(
            owner=f"postulante '{applicant.id}'",
            owner_id=applicant.id,
            preferences=applicant.preferences,
            declared=declared_programs,
            referenced_kind="programa",
            problems=problems,
            malformed=malformed,
        )

    for program in problem.programs:
        _check_list(
            owner=f"programa '{program.id}'",
            owner_id=program.id,
            preferences=program.preferences,
            declared=declared_applicants,
            referenced_kind="postulante",
            problems=problems,
            malformed=malformed,
        )
        if program.capacity < 1:
            problems.append(
                f"El programa '{program.id}' tiene cupo {program.capacity}; debe ser >= 1"
            )

    if not problems and not malformed:
        return

    all_problems = malformed + problems
    logger.warning("Entrada inválida", problems=len(all_problems))

    error_class = MalformedPreferenceError if malformed else InvalidInputError
    raise error_class(
        f"Entrada inválida ({len(all_problems)} problema(s)): {all_problems[0]}",
        problems=all_problems,
    )


def _check_list(
    owner: str,
    owner_id: str,
    preferences: tuple[str, ...],
    declared: set[str],
    referenced_kind: str,
    problems: list[str],
    malformed: list[str],
) -> None:
    for identity, count in Counter(preferences).items():
        if count > 1:
            problems.append(f"El {owner} rankea '{identity}' {count} veces")

    for identity in dict.fromkeys(preferences):
        if identity == owner_id:
            malformed.append(f"El {owner} se incluye en su propia lista")
        elif identity not in declared:
            problems.append(
                f"El {owner} referencia al {referenced_kind} no declarado '{identity}'"
            )
