"""
Tests de carga de problemas.
"""

import json

import pytest

from plazas.exceptions import InvalidInputError
from plazas.loaders import (
    load_problem,
    parse_problem,
    problem_from_mappings,
    sample_problem,
    save_problem,
)


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadProblem:
    """Lectura de archivos JSON."""

    def test_load_valid_file(self, tmp_path):
        path = _write(
            tmp_path / "problem.json",
            {
                "applicants": {"B": ["P1"], "A": ["P2", "P1"]},
                "programs": {"P2": {"preferences": ["A"], "capacity": 1}, "P1": {"capacity": 2}},
            },
        )
        problem = load_problem(path)

        assert problem.applicant_ids == ["B", "A"]
        assert problem.program_ids == ["P2", "P1"]
        assert problem.applicants_by_id()["A"].preferences == ("P2", "P1")
        assert problem.programs_by_id()["P1"].preferences == ()
        assert problem.programs_by_id()["P1"].capacity == 2

    def test_accepts_str_path(self, tmp_path):
        path = _write(tmp_path / "p.json", {"applicants": {}, "programs": {}})
        assert load_problem(str(path)).applicants == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError, match="No se pudo leer"):
            load_problem(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(InvalidInputError, match="no es JSON válido"):
            load_problem(path)

    def test_missing_capacity(self, tmp_path):
        path = _write(tmp_path / "p.json", {"programs": {"P1": {"preferences": []}}})

        with pytest.raises(InvalidInputError) as exc_info:
            load_problem(path)

        assert any("capacity" in problem for problem in exc_info.value.problems)

    def test_float_capacity_rejected(self, tmp_path):
        path = _write(tmp_path / "p.json", {"programs": {"P1": {"capacity": 1.5}}})

        with pytest.raises(InvalidInputError):
            load_problem(path)

    def test_unknown_top_level_key(self, tmp_path):
        path = _write(tmp_path / "p.json", {"applicants": {}, "programs": {}, "spots": {}})

        with pytest.raises(InvalidInputError):
            load_problem(path)

    def test_save_then_load(self, tmp_path, sample):
        path = tmp_path / "sample.json"
        save_problem(sample, path)

        assert load_problem(path) == sample


class TestParseProblem:
    """Parseo de dicts ya cargados."""

    def test_not_a_dict(self):
        with pytest.raises(InvalidInputError, match="formato inválido"):
            parse_problem(["applicants"], source="lista")

    def test_source_in_problems(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_problem({"applicants": {"X": "P1"}}, source="entrada.json")

        assert all(p.startswith("entrada.json") for p in exc_info.value.problems)


class TestSampleProblem:
    """Problema de ejemplo empaquetado."""

    def test_sizes(self):
        problem = sample_problem()

        assert len(problem.applicants) == 10
        assert [p.capacity for p in problem.programs] == [2, 3, 4, 2]
        assert problem.total_capacity == 11

    def test_declaration_order(self):
        problem = sample_problem()

        assert problem.applicant_ids[0] == "Applicant1"
        assert problem.applicant_ids[-1] == "Applicant10"


class TestProblemFromMappings:
    """Armado desde los mapas planos de solve()."""

    def test_builds_problem_in_declaration_order(self):
        problem = problem_from_mappings(
            {"B": ["P1"], "A": ["P2", "P1"]},
            {"P2": {"preferences": ["A"], "capacity": 1}, "P1": (["A", "B"], 2)},
        )

        assert problem.applicant_ids == ["B", "A"]
        assert problem.program_ids == ["P2", "P1"]
        assert problem.programs_by_id()["P1"].capacity == 2

    def test_matches_json_loader(self, sample):
        assert problem_from_mappings(**_as_plain_maps(sample)) == sample

    def test_non_mapping_applicants(self):
        with pytest.raises(InvalidInputError, match="'applicants' debe ser un mapa"):
            problem_from_mappings([("X", ["P1"])], {"P1": (["X"], 1)})

    def test_non_mapping_programs(self):
        with pytest.raises(InvalidInputError, match="'programs' debe ser un mapa"):
            problem_from_mappings({"X": ["P1"]}, [("P1", ["X"], 1)])

    def test_unknown_program_key(self):
        with pytest.raises(InvalidInputError, match="claves desconocidas: capcity"):
            problem_from_mappings(
                {"X": ["P1"]},
                {"P1": {"preferences": ["X"], "capacity": 1, "capcity": 1}},
            )


def _as_plain_maps(problem):
    data = problem.to_mappings()
    return {
        "applicants": data["applicants"],
        "programs": {
            program_id: (entry["preferences"], entry["capacity"])
            for program_id, entry in data["programs"].items()
        },
    }
