"""
Motor de matching entre postulantes y programas.

Implementa deferred acceptance con cupos, con propuestas de los postulantes:
- Cada postulante sin asignar se postula a su próxima opción no considerada
- El programa admite si tiene lugar; si está lleno, desplaza a su admitido
  menos preferido solo si el nuevo postulante le gusta estrictamente más
- Un postulante que agota su lista sin ser admitido queda sin asignar
  en forma definitiva

El resultado es estable: no existe un par postulante-programa que se
prefieran mutuamente por sobre su asignación actual.
"""

from collections import deque
from collections.abc import Mapping, Sequence
from typing import Optional

import structlog

from plazas.config import (
    OUTCOME_ADMITTED,
    OUTCOME_DISPLACED_OTHER,
    OUTCOME_EXHAUSTED,
    OUTCOME_REJECTED_FULL,
    OUTCOME_REJECTED_UNRANKED,
    ROUND_MODES,
    Settings,
    get_settings,
)
from plazas.loaders import problem_from_mappings
from plazas.matching.state import MatchState
from plazas.matching.validation import validate_problem
from plazas.models import MatchingProblem, MatchResult
from plazas.models.problem import ProgramInput

logger = structlog.get_logger()


class MatchingEngine:
    """
    Motor de deferred acceptance con cupos.

    Flujo de cada corrida:
    1. Validar la entrada (antes de crear estado)
    2. Rondas: los no asignados se postulan en orden de declaración
    3. Cortar cuando todos los no asignados agotaron su lista

    Modos de ronda:
    - snapshot: la ronda recorre los no asignados que había al empezarla;
      los desplazados durante la ronda esperan a la siguiente
    - reactive: los desplazados se agregan al final de la ronda en curso
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        round_mode: Optional[str] = None,
        record_events: Optional[bool] = None,
    ):
        self.settings = settings or get_settings()
        self.round_mode = round_mode or self.settings.round_mode
        self.record_events = (
            self.settings.record_events if record_events is None else record_events
        )

        if self.round_mode not in ROUND_MODES:
            raise ValueError(
                f"Modo de ronda no soportado: {self.round_mode} (usar {', '.join(ROUND_MODES)})"
            )

    def run(self, problem: MatchingProblem) -> MatchResult:
        """
        Ejecuta el matching completo.

        Args:
            problem: Postulantes y programas de la corrida

        Returns:
            MatchResult con la asignación estable y los no asignados

        Raises:
            InvalidInputError: si la entrada no es válida (no se crea estado)
        """
        validate_problem(problem)

        state = MatchState.start(problem)

        logger.info(
            "Iniciando matching",
            applicants=len(problem.applicants),
            programs=len(problem.programs),
            capacity=problem.total_capacity,
            round_mode=self.round_mode,
        )

        while state.unmatched:
            state.rounds += 1

            if self.round_mode == "reactive":
                self._run_reactive_round(state)
            else:
                self._run_snapshot_round(state)

            # Nadie que siga sin asignar puede progresar: fin
            if all(state.is_exhausted(a) for a in state.unmatched):
                for applicant_id in state.ordered_unmatched():
                    self._retire(state, applicant_id)
                break

        result = state.to_result(keep_events=self.record_events)

        logger.info(
            "Matching completado",
            rounds=result.rounds,
            proposals=result.proposals,
            matched=result.matched_count,
            unmatched=len(result.unmatched),
        )

        return result

    def _run_snapshot_round(self, state: MatchState) -> None:
        for applicant_id in state.ordered_unmatched():
            self._step(state, applicant_id)

    def _run_reactive_round(self, state: MatchState) -> None:
        queue = deque(state.ordered_unmatched())
        while queue:
            displaced = self._step(state, queue.popleft())
            if displaced is not None:
                queue.append(displaced)

    def _step(self, state: MatchState, applicant_id: str) -> Optional[str]:
        """
        Procesa un postulante sin asignar.

        Returns:
            El postulante desplazado por esta postulación, si hubo uno
        """
        if state.is_exhausted(applicant_id):
            self._retire(state, applicant_id)
            return None

        program_id = state.next_program(applicant_id)
        ranks = state.program_ranks[program_id]
        log = logger.bind(applicant=applicant_id, program=program_id, round=state.rounds)

        if applicant_id not in ranks:
            log.debug("Postulación rechazada: el programa no rankea al postulante")
            self._record(state, applicant_id, program_id, OUTCOME_REJECTED_UNRANKED)
            return None

        if not state.is_full(program_id):
            state.admit(applicant_id, program_id)
            log.debug("Postulante admitido")
            self._record(state, applicant_id, program_id, OUTCOME_ADMITTED)
            return None

        worst = state.least_preferred(program_id)

        # Menor índice = más preferido; no hay empates en listas estrictas
        if ranks[applicant_id] < ranks[worst]:
            state.displace(worst, program_id)
            state.admit(applicant_id, program_id)
            log.debug("Postulante admitido desplazando al menos preferido", displaced=worst)
            self._record(
                state, applicant_id, program_id, OUTCOME_DISPLACED_OTHER, displaced=worst
            )
            return worst

        log.debug("Postulación rechazada: cupo lleno con preferidos", least_preferred=worst)
        self._record(state, applicant_id, program_id, OUTCOME_REJECTED_FULL)
        return None

    def _retire(self, state: MatchState, applicant_id: str) -> None:
        state.retire(applicant_id)
        logger.debug(
            "Postulante agotó su lista y queda sin asignar",
            applicant=applicant_id,
            round=state.rounds,
        )
        self._record(state, applicant_id, None, OUTCOME_EXHAUSTED)

    def _record(self, state: MatchState, *args, **kwargs) -> None:
        if self.record_events:
            state.record(*args, **kwargs)


def solve(
    applicants: Mapping[str, Sequence[str]],
    programs: Mapping[str, ProgramInput],
    settings: Optional[Settings] = None,
) -> tuple[dict[str, list[str]], list[str]]:
    """
    Calcula una asignación estable desde mapas planos.

    Args:
        applicants: postulante -> programas en orden de preferencia
        programs: programa -> (postulantes en orden de preferencia, cupo)

    Returns:
        (asignación programa -> admitidos, postulantes sin asignar)

    Raises:
        InvalidInputError: si la entrada no es válida
    """
    problem = problem_from_mappings(applicants, programs)
    result = MatchingEngine(settings=settings).run(problem)
    return result.assignment, result.unmatched
