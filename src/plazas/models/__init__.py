"""
Modelos de datos del sistema.

- Agentes: Applicant y Program (inmutables, se cargan una vez)
- Problema: MatchingProblem (orden de declaración = orden de proceso)
- Resultado: MatchResult y ProposalEvent
"""

from plazas.models.agents import Applicant, Program
from plazas.models.problem import MatchingProblem
from plazas.models.result import MatchResult, ProposalEvent

__all__ = [
    # Agentes
    "Applicant",
    "Program",
    # Problema
    "MatchingProblem",
    # Resultado
    "MatchResult",
    "ProposalEvent",
]
