from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import CycleStatus
from src.talent_hub.talent_hub.evaluations.model import EvaluationCycle
from src.talent_hub.talent_hub.evaluations.service import EvaluationService


class InMemoryCycleRepo:
    def __init__(self, cycles=()):
        self.cycles = {c.cycle_id: c for c in cycles}

    def list_all(self):
        return sorted(self.cycles.values(), key=lambda c: c.start_date, reverse=True)

    def get_by_id(self, cycle_id):
        return self.cycles.get(cycle_id)

    def get_open(self):
        return next((c for c in self.cycles.values() if c.status is CycleStatus.OPEN), None)

    def create(self, *, name, start_date, end_date):
        cycle = EvaluationCycle(
            cycle_id=f"cyc-{len(self.cycles) + 1}", name=name, start_date=start_date, end_date=end_date
        )
        self.cycles[cycle.cycle_id] = cycle
        return cycle

    def set_status(self, cycle_id, status):
        if cycle_id not in self.cycles:
            return False
        self.cycles[cycle_id] = replace(self.cycles[cycle_id], status=status)
        return True


class InMemoryEvaluationRepo:
    def __init__(self):
        self.items = []

    def exists(self, *, cycle_id, employee_id, evaluation_type):
        return any(
            e.cycle_id == cycle_id and e.employee_id == employee_id and e.evaluation_type is evaluation_type
            for e in self.items
        )

    def create(self, evaluation):
        saved = replace(evaluation, evaluation_id=f"ev-{len(self.items) + 1}")
        self.items.append(saved)
        return saved

    def list_for_employee(self, *, employee_id, cycle_id=None):
        return [e for e in self.items if e.employee_id == employee_id and cycle_id in (None, e.cycle_id)]

    def list_for_cycle(self, *, cycle_id, evaluation_type):
        return [e for e in self.items if e.cycle_id == cycle_id and e.evaluation_type is evaluation_type]


@pytest.fixture
def cycles():
    return InMemoryCycleRepo(
        [
            EvaluationCycle("cyc-2025", "Ciclo 2025", date(2025, 1, 1), date(2025, 12, 31), CycleStatus.OPEN),
            EvaluationCycle("cyc-2024", "Ciclo 2024", date(2024, 1, 1), date(2024, 12, 31), CycleStatus.CLOSED),
        ]
    )


@pytest.fixture
def evaluations():
    return InMemoryEvaluationRepo()


@pytest.fixture
def evaluation_service(cycles, evaluations):
    return EvaluationService(cycles, evaluations)
