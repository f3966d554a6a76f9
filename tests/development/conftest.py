from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import ContractType, InternLevel, ProfileType
from src.talent_hub.talent_hub.development.service import DevelopmentPlanService
from src.talent_hub.talent_hub.organization.model import Department
from src.talent_hub.talent_hub.users.model import User


class FakeUsers:
    def __init__(self, users):
        self.users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self.users.get(user_id)


class FakeDepartments:
    def __init__(self, departments):
        self.departments = list(departments)

    def list_all(self):
        return self.departments


class InMemoryPlanRepo:
    def __init__(self):
        self.saved = []

    def get_latest_for_employee(self, employee_id):
        plans = [p for p in self.saved if p.employee_id == employee_id]
        return plans[-1] if plans else None

    def save(self, plan):
        if plan.plan_id is None:
            plan = replace(plan, plan_id=f"pdi-{len(self.saved) + 1}")
        self.saved = [p for p in self.saved if p.plan_id != plan.plan_id] + [plan]
        return plan


@pytest.fixture
def employee():
    return User(
        user_id="usr-1",
        name="Maria",
        email="maria@example.com",
        position="Desenvolvedora",
        profile_type=ProfileType.REGULAR,
        intern_level=InternLevel.A,
        contract_type=ContractType.CLT,
        department_id="dep-tech",
    )


@pytest.fixture
def plans():
    return InMemoryPlanRepo()


@pytest.fixture
def development_service(plans, employee):
    return DevelopmentPlanService(
        plans,
        FakeUsers([employee]),
        FakeDepartments([Department("dep-tech", "Tecnologia")]),
        clock=lambda: date(2026, 10, 18),
    )
