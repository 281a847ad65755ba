"""
Resultado de una corrida del motor de matching.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional

from plazas.config import PROPOSAL_OUTCOMES


@dataclass(frozen=True)
class ProposalEvent:
    """Una postulación (o el agotamiento de una lista) y su desenlace."""

    round: int
    applicant: str
    program: Optional[str]
    outcome: str
    displaced: Optional[str] = None

    def __post_init__(self):
        if self.outcome not in PROPOSAL_OUTCOMES:
            raise ValueError(
                f"Desenlace de postulación desconocido: {self.outcome} "
                f"(usar {', '.join(PROPOSAL_OUTCOMES)})"
            )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class MatchResult:
    """
    Asignación final y estadísticas de la corrida.

    `assignment` respeta el orden de declaración de los programas y, dentro
    de cada programa, el orden de admisión. `unmatched` respeta el orden de
    declaración de los postulantes.
    """

    assignment: dict[str, list[str]]
    unmatched: list[str]
    rounds: int = 0
    proposals: int = 0
    events: list[ProposalEvent] = field(default_factory=list)

    @property
    def matched_count(self) -> int:
        return sum(len(admitted) for admitted in self.assignment.values())

    def to_dict(self, include_events: bool = True) -> dict:
        """Convierte a diccionario serializable a JSON."""
        data = {
            "assignment": {p: list(a) for p, a in self.assignment.items()},
            "unmatched": list(self.unmatched),
            "rounds": self.rounds,
            "proposals": self.proposals,
        }
        if include_events and self.events:
            data["events"] = [event.to_dict() for event in self.events]
        return data
