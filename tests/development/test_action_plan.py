from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import ActionItemStatus, ContractType, InternLevel, PlanHorizon, ProfileType
from src.talent_hub.talent_hub.core.exceptions import ValidationError
from src.talent_hub.talent_hub.development.model import ActionPlan
from src.talent_hub.talent_hub.development.service import (
    add_item,
    default_period,
    progress,
    remove_item,
    start_plan,
    update_item,
    validate_for_save,
)
from src.talent_hub.talent_hub.users.model import User

EMPLOYEE = User(
    user_id="usr-1",
    name="Maria",
    email="maria@example.com",
    position="Desenvolvedora",
    profile_type=ProfileType.REGULAR,
    intern_level=InternLevel.A,
    contract_type=ContractType.CLT,
)


def test_default_period_spans_two_years():
    assert default_period(date(2026, 10, 18)) == "2026-2027"


def test_start_plan_copies_employee_data():
    plan = start_plan(EMPLOYEE, department_name="Tecnologia", today=date(2026, 1, 2))
    assert plan.employee_id == "usr-1"
    assert plan.position == "Desenvolvedora"
    assert plan.department == "Tecnologia"
    assert plan.period == "2026-2027"
    assert plan.all_items == ()


def test_items_are_added_per_horizon_without_mutating():
    plan = start_plan(EMPLOYEE)
    updated = add_item(plan, PlanHorizon.SHORT_TERM, item_id="a")
    updated = add_item(updated, PlanHorizon.LONG_TERM, item_id="b")

    assert plan.all_items == ()
    assert [i.item_id for i in updated.items_for(PlanHorizon.SHORT_TERM)] == ["a"]
    assert [i.item_id for i in updated.all_items] == ["a", "b"]


def test_update_and_remove_item():
    plan = add_item(start_plan(EMPLOYEE), PlanHorizon.MEDIUM_TERM, item_id="a")
    plan = update_item(plan, PlanHorizon.MEDIUM_TERM, "a", "competency", "Liderança")
    plan = update_item(plan, PlanHorizon.MEDIUM_TERM, "a", "status", "5")

    item = plan.items_for(PlanHorizon.MEDIUM_TERM)[0]
    assert item.competency == "Liderança"
    assert item.status is ActionItemStatus.DONE

    assert remove_item(plan, PlanHorizon.MEDIUM_TERM, "a").all_items == ()


def test_update_rejects_unknown_fields():
    plan = add_item(start_plan(EMPLOYEE), PlanHorizon.SHORT_TERM, item_id="a")
    with pytest.raises(ValidationError):
        update_item(plan, PlanHorizon.SHORT_TERM, "a", "item_id", "b")


def test_progress_is_the_share_of_done_items():
    plan = start_plan(EMPLOYEE)
    assert progress(plan) == 0.0

    for item_id in ("a", "b", "c", "d"):
        plan = add_item(plan, PlanHorizon.SHORT_TERM, item_id=item_id)
    plan = update_item(plan, PlanHorizon.SHORT_TERM, "a", "status", ActionItemStatus.DONE)

    assert progress(plan) == 25.0


def test_validate_for_save():
    with pytest.raises(ValidationError, match="Selecione um colaborador"):
        validate_for_save(ActionPlan())

    with pytest.raises(ValidationError, match="Adicione pelo menos um item"):
        validate_for_save(start_plan(EMPLOYEE))

    validate_for_save(add_item(start_plan(EMPLOYEE), PlanHorizon.SHORT_TERM))
