"""
Propiedades del matching sobre problemas aleatorios reproducibles.
"""

import pytest

from plazas.matching import MatchingEngine, find_blocking_pairs

SEEDS = list(range(40))


@pytest.mark.parametrize("seed", SEEDS)
class TestMatchingProperties:
    """Invariantes que valen para cualquier entrada válida."""

    def test_capacity(self, any_engine, make_random_problem, seed):
        problem = make_random_problem(seed)
        result = any_engine.run(problem)

        for program in problem.programs:
            assert len(result.assignment[program.id]) <= program.capacity

    def test_exclusivity_and_partition(self, any_engine, make_random_problem, seed):
        """Cada postulante está en exactamente un programa o entre los no asignados."""
        problem = make_random_problem(seed)
        result = any_engine.run(problem)

        admitted = [a for members in result.assignment.values() for a in members]
        assert len(admitted) == len(set(admitted))
        assert set(admitted).isdisjoint(result.unmatched)
        assert sorted(admitted + result.unmatched) == sorted(problem.applicant_ids)

    def test_stability(self, any_engine, make_random_problem, seed):
        problem = make_random_problem(seed)
        result = any_engine.run(problem)

        assert find_blocking_pairs(problem, result.assignment) == []

    def test_termination_bound(self, any_engine, make_random_problem, seed):
        problem = make_random_problem(seed)
        result = any_engine.run(problem)

        assert result.proposals <= problem.total_preferences
        assert result.rounds <= max(1, problem.total_preferences)

    def test_determinism(self, settings, make_random_problem, seed):
        problem = make_random_problem(seed)
        first = MatchingEngine(settings=settings, record_events=True).run(problem)
        second = MatchingEngine(settings=settings, record_events=True).run(problem)

        assert first == second

    def test_round_modes_reach_same_matching(self, settings, make_random_problem, seed):
        """Con propuestas de postulantes el resultado no depende del orden de proceso."""
        problem = make_random_problem(seed)
        snapshot = MatchingEngine(settings=settings, round_mode="snapshot").run(problem)
        reactive = MatchingEngine(settings=settings, round_mode="reactive").run(problem)

        assert {p: set(a) for p, a in snapshot.assignment.items()} == {
            p: set(a) for p, a in reactive.assignment.items()
        }
        assert snapshot.unmatched == reactive.unmatched
