"""
Configuración de pytest y fixtures compartidos.
"""

import random

import pytest

from plazas.config import Settings
from plazas.loaders import sample_problem
from plazas.matching import MatchingEngine
from plazas.models import MatchingProblem


# ==============================================================================
# SETTINGS / ENGINE
# ==============================================================================

@pytest.fixture
def settings():
    """Settings con valores por defecto, sin leer .env."""
    return Settings(_env_file=None)


@pytest.fixture
def engine(settings):
    """Motor en modo snapshot que guarda eventos."""
    return MatchingEngine(settings=settings, record_events=True)


@pytest.fixture(params=["snapshot", "reactive"])
def any_engine(request, settings):
    """Motor parametrizado sobre ambos modos de ronda."""
    return MatchingEngine(settings=settings, round_mode=request.param, record_events=True)


# ==============================================================================
# PROBLEMS
# ==============================================================================

@pytest.fixture
def sample():
    """Problema de ejemplo de 10 postulantes y 4 programas."""
    return sample_problem()


@pytest.fixture
def displacement_problem():
    """X entra primero a P1 y luego Y lo desplaza; X sigue con P2."""
    return MatchingProblem.from_mappings(
        {"X": ["P1", "P2"], "Y": ["P1"]},
        {"P1": (["Y", "X"], 1), "P2": (["X"], 1)},
    )


def random_problem(seed: int, n_applicants: int = 12, n_programs: int = 4) -> MatchingProblem:
    """
    Problema aleatorio reproducible con listas parciales.

    Cada postulante rankea un subconjunto de programas y cada programa
    rankea un subconjunto de postulantes.
    """
    rng = random.Random(seed)
    applicant_ids = [f"A{i}" for i in range(n_applicants)]
    program_ids = [f"P{j}" for j in range(n_programs)]

    applicants = {
        a: rng.sample(program_ids, rng.randint(0, n_programs)) for a in applicant_ids
    }
    programs = {
        p: (
            rng.sample(applicant_ids, rng.randint(0, n_applicants)),
            rng.randint(1, 4),
        )
        for p in program_ids
    }
    return MatchingProblem.from_mappings(applicants, programs)


@pytest.fixture
def make_random_problem():
    """Fábrica de problemas aleatorios reproducibles."""
    return random_problem
