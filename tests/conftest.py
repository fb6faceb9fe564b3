"""Shared roster fixtures."""

import pandas as pd
import pytest

from workforce_analytics.config import DEFAULT_CATALOG
from workforce_analytics.domains.diversity.hierarchy import HierarchyClassifier
from workforce_analytics.domains.diversity.transform import (
    attach_position_titles,
    normalize_employee_records,
    normalize_positions,
)

POSITIONS = [
    {"id": "p-ceo", "title": "CEO", "level": "C"},
    {"id": "p-dir", "title": "Diretor Financeiro", "level": "D"},
    {"id": "p-mgr", "title": "Gerente de Projetos", "level": "M"},
    {"id": "p-coord", "title": "Coordenador de RH", "level": "C2"},
    {"id": "p-analyst", "title": "Analista de Sistemas", "level": "IC"},
    {"id": "p-intern", "title": "Estagiário de TI", "level": None},
]


def employee(
    emp_id: str,
    gender: str | None = "Feminino",
    ethnicity: str | None = "Branco",
    is_pcd: bool = False,
    department: str | None = "Operações",
    salary: float | None = 5000.0,
    position_id: str | None = "p-analyst",
    status: str = "Ativo",
    company_id: str = "acme",
) -> dict:
    return {
        "id": emp_id,
        "full_name": f"Employee {emp_id}",
        "gender": gender,
        "ethnicity": ethnicity,
        "is_pcd": is_pcd,
        "pcd_type": "Física" if is_pcd else None,
        "department": department,
        "salary": salary,
        "status": status,
        "position_id": position_id,
        "company_id": company_id,
    }


@pytest.fixture
def positions_frame() -> pd.DataFrame:
    return pd.DataFrame(POSITIONS)


@pytest.fixture
def make_roster(positions_frame):
    """Normalize, attach titles and classify a list of raw employee dicts."""
    classifier = HierarchyClassifier(DEFAULT_CATALOG)

    def _make(records: list[dict]) -> pd.DataFrame:
        employees = normalize_employee_records(pd.DataFrame(records))
        employees = attach_position_titles(employees, normalize_positions(positions_frame))
        return classifier.classify_frame(employees)

    return _make


@pytest.fixture
def mixed_records() -> list[dict]:
    """A small company spread across every tier."""
    return [
        employee("1", gender="Masculino", position_id="p-ceo", department="Diretoria Executiva", salary=50000),
        employee("2", gender="Feminino", ethnicity="Pardo", position_id="p-dir", department="Financeiro", salary=30000),
        employee("3", gender="Masculino", position_id="p-dir", department="Financeiro", salary=32000),
        employee("4", gender="Feminino", ethnicity="Preto", position_id="p-mgr", department="Tecnologia", salary=18000),
        employee("5", gender="Masculino", ethnicity="Amarelo", position_id="p-coord", department="RH", salary=12000),
        employee("6", gender="Feminino", ethnicity="Preto", is_pcd=True, department="Tecnologia", salary=7000),
        employee("7", gender="Masculino", ethnicity="Branco", department="Tecnologia", salary=8000),
        employee("8", gender="Outro", ethnicity="Indígena", department="RH", salary=6500),
        employee("9", gender=None, ethnicity=None, department=None, salary=None),
        employee("10", gender="Feminino", ethnicity="Não declarado", position_id="p-intern", department="Tecnologia", salary=2000),
    ]
