"""
Reporte de la asignación final.

- Texto: una línea por programa y una línea con los no asignados
- JSON: asignación, no asignados, estadísticas y (si se guardaron) eventos
"""

import json
from typing import Optional

from plazas.config import (
    OUTCOME_ADMITTED,
    OUTCOME_DISPLACED_OTHER,
    OUTCOME_EXHAUSTED,
    OUTCOME_REJECTED_UNRANKED,
)
from plazas.matching.stability import BlockingPair
from plazas.models import MatchingProblem, MatchResult, ProposalEvent

EMPTY_MARK = "-"


def render_text(
    problem: MatchingProblem,
    result: MatchResult,
    blocking_pairs: Optional[list[BlockingPair]] = None,
) -> str:
    """
    Reporte legible, programas en orden de declaración.

    Ejemplo:
        Asignación final:
        Program1 (2/2): Applicant1, Applicant9
        ...

        Postulantes sin asignar:
        Applicant2
    """
    lines = ["Asignación final:"]
    for program in problem.programs:
        admitted = result.assignment.get(program.id, [])
        listing = ", ".join(admitted) if admitted else EMPTY_MARK
        lines.append(f"{program.id} ({len(admitted)}/{program.capacity}): {listing}")

    lines.append("")
    lines.append("Postulantes sin asignar:")
    lines.append(", ".join(result.unmatched) if result.unmatched else EMPTY_MARK)

    lines.append("")
    lines.append(f"Rondas: {result.rounds} | Postulaciones: {result.proposals}")

    if result.events:
        lines.append("")
        lines.append("Postulaciones:")
        for event in result.events:
            lines.append(_format_event(event))

    if blocking_pairs is not None:
        lines.append("")
        if blocking_pairs:
            lines.append("Pares bloqueantes:")
            for pair in blocking_pairs:
                lines.append(f"{pair.applicant} <-> {pair.program}")
        else:
            lines.append("Asignación estable: sin pares bloqueantes")

    return "\n".join(lines)


def render_json(
    problem: MatchingProblem,
    result: MatchResult,
    blocking_pairs: Optional[list[BlockingPair]] = None,
) -> str:
    """Reporte JSON, con la asignación en orden de declaración de programas."""
    data = result.to_dict()
    data["assignment"] = {
        program.id: list(result.assignment.get(program.id, [])) for program in problem.programs
    }
    data["capacity"] = {program.id: program.capacity for program in problem.programs}

    if blocking_pairs is not None:
        data["stable"] = not blocking_pairs
        data["blocking_pairs"] = [
            {"applicant": pair.applicant, "program": pair.program} for pair in blocking_pairs
        ]

    return json.dumps(data, ensure_ascii=False, indent=2)


def _format_event(event: ProposalEvent) -> str:
    prefix = f"[ronda {event.round}] {event.applicant}"
    if event.outcome == OUTCOME_EXHAUSTED:
        return f"{prefix} agotó su lista y queda sin asignar"
    if event.outcome == OUTCOME_ADMITTED:
        return f"{prefix} -> {event.program}: admitido"
    if event.outcome == OUTCOME_DISPLACED_OTHER:
        return f"{prefix} -> {event.program}: admitido, desplaza a {event.displaced}"
    if event.outcome == OUTCOME_REJECTED_UNRANKED:
        return f"{prefix} -> {event.program}: rechazado (no lo rankea)"
    return f"{prefix} -> {event.program}: rechazado (cupo lleno)"
