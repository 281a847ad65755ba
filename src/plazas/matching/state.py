"""
Estado mutable de una corrida de deferred acceptance.

Cada corrida crea su propio MatchState; nada se comparte entre corridas.
"""

from dataclasses import dataclass, field
from typing import Optional

from plazas.models import MatchingProblem, MatchResult, ProposalEvent


@dataclass
class MatchState:
    """
    Cursores, asignaciones y cola de no asignados.

    - cursors[a]: índice del próximo programa a considerar en la lista de a
    - assignment[p]: admitidos de p en orden de admisión (len <= cupo)
    - unmatched: no asignados que todavía pueden postularse
    - exhausted: no asignados en forma definitiva (lista agotada)
    """

    order: dict[str, int]
    applicant_prefs: dict[str, tuple[str, ...]]
    program_ranks: dict[str, dict[str, int]]
    capacities: dict[str, int]
    cursors: dict[str, int]
    assignment: dict[str, list[str]]
    unmatched: set[str]
    exhausted: set[str] = field(default_factory=set)
    matched_to: dict[str, str] = field(default_factory=dict)
    rounds: int = 0
    proposals: int = 0
    events: list[ProposalEvent] = field(default_factory=list)

    @classmethod
    def start(cls, problem: MatchingProblem) -> "MatchState":
        """Todos sin asignar con cursor 0 y todos los programas vacíos."""
        return cls(
            order={a.id: i for i, a in enumerate(problem.applicants)},
            applicant_prefs={a.id: a.preferences for a in problem.applicants},
            program_ranks={p.id: p.ranks() for p in problem.programs},
            capacities={p.id: p.capacity for p in problem.programs},
            cursors={a.id: 0 for a in problem.applicants},
            assignment={p.id: [] for p in problem.programs},
            unmatched={a.id for a in problem.applicants},
        )

    def ordered_unmatched(self) -> list[str]:
        return sorted(self.unmatched, key=self.order.__getitem__)

    def is_exhausted(self, applicant_id: str) -> bool:
        return self.cursors[applicant_id] >= len(self.applicant_prefs[applicant_id])

    def next_program(self, applicant_id: str) -> str:
        """Devuelve el próximo programa de la lista y avanza el cursor."""
        cursor = self.cursors[applicant_id]
        self.cursors[applicant_id] = cursor + 1
        self.proposals += 1
        return self.applicant_prefs[applicant_id][cursor]

    def is_full(self, program_id: str) -> bool:
        return len(self.assignment[program_id]) >= self.capacities[program_id]

    def least_preferred(self, program_id: str) -> str:
        """El admitido con peor ranking (mayor índice) en el programa."""
        ranks = self.program_ranks[program_id]
        return max(self.assignment[program_id], key=ranks.__getitem__)

    def admit(self, applicant_id: str, program_id: str) -> None:
        self.assignment[program_id].append(applicant_id)
        self.matched_to[applicant_id] = program_id
        self.unmatched.discard(applicant_id)

    def displace(self, applicant_id: str, program_id: str) -> None:
        # El cursor del desplazado no cambia: sigue con su próxima opción
        self.assignment[program_id].remove(applicant_id)
        del self.matched_to[applicant_id]
        self.unmatched.add(applicant_id)

    def retire(self, applicant_id: str) -> None:
        self.unmatched.discard(applicant_id)
        self.exhausted.add(applicant_id)

    def record(
        self,
        applicant_id: str,
        program_id: Optional[str],
        outcome: str,
        displaced: Optional[str] = None,
    ) -> None:
        self.events.append(
            ProposalEvent(
                round=self.rounds,
                applicant=applicant_id,
                program=program_id,
                outcome=outcome,
                displaced=displaced,
            )
        )

    def to_result(self, keep_events: bool = True) -> MatchResult:
        matched = set(self.matched_to)
        return MatchResult(
            assignment={p: list(admitted) for p, admitted in self.assignment.items()},
            unmatched=[a for a in self.order if a not in matched],
            rounds=self.rounds,
            proposals=self.proposals,
            events=list(self.events) if keep_events else [],
        )
