from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import InternLevel, ProfileType
from src.talent_hub.talent_hub.organization.model import Department, JobPosition, Team, Track, TrackPosition
from src.talent_hub.talent_hub.registration.form import FormSnapshot
from src.talent_hub.talent_hub.users.model import UserSummary

TODAY = date(2026, 10, 18)

DEPARTMENTS = (
    Department(department_id="dep-tech", name="Tecnologia"),
    Department(department_id="dep-people", name="Pessoas"),
    Department(department_id="dep-empty", name="Jurídico"),
)

TRACKS = (
    Track(track_id="trk-eng", name="Engenharia", department_id="dep-tech"),
    Track(track_id="trk-data", name="Dados", department_id="dep-tech"),
    Track(track_id="trk-hrbp", name="Business Partner", department_id="dep-people"),
)

POSITIONS = (
    TrackPosition(
        link_id="lnk-dev-jr",
        track_id="trk-eng",
        position_id="pos-dev-jr",
        order_index=1,
        position=JobPosition(position_id="pos-dev-jr", name="Desenvolvedor Júnior", code="DEV-JR"),
    ),
    TrackPosition(
        link_id="lnk-dev-pl",
        track_id="trk-eng",
        position_id="pos-dev-pl",
        order_index=2,
        position=JobPosition(position_id="pos-dev-pl", name="Desenvolvedor Pleno", code="DEV-PL"),
    ),
    TrackPosition(link_id="lnk-analyst", track_id="trk-data", position_id="pos-analyst", order_index=1),
    TrackPosition(
        link_id="lnk-hr",
        track_id="trk-hrbp",
        position_id="pos-hr",
        order_index=1,
        position=JobPosition(position_id="pos-hr", name="Analista de RH"),
    ),
)

TEAMS = (
    Team(team_id="team-platform", name="Plataforma", department_id="dep-tech"),
    Team(team_id="team-payments", name="Pagamentos", department_id="dep-tech"),
)

USERS = (
    UserSummary(user_id="usr-director", name="Ana", position="Diretora", profile_type=ProfileType.DIRECTOR),
    UserSummary(user_id="usr-leader", name="Bruno", position="Tech Lead", profile_type=ProfileType.LEADER),
    UserSummary(user_id="usr-regular", name="Carla", position="Dev", profile_type=ProfileType.REGULAR),
)


@dataclass
class StaticReference:
    """Reference data already loaded, as the registration form sees it."""

    tracks: tuple = TRACKS
    positions: tuple = POSITIONS
    users: tuple = USERS
    departments: tuple = DEPARTMENTS
    teams: tuple = TEAMS
    failures: dict = field(default_factory=dict)
    reload_calls: int = 0

    def reload_users(self) -> None:
        self.reload_calls += 1


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def reference() -> StaticReference:
    return StaticReference()


@pytest.fixture
def valid_snapshot() -> FormSnapshot:
    return FormSnapshot(
        name="  Maria Souza ",
        email="Maria.Souza@Example.COM",
        password="segredo1",
        position="Desenvolvedor Júnior",
        profile_type=ProfileType.REGULAR,
        team_ids=("team-platform", "team-payments"),
        phone="(11) 91234-5678",
        birth_date=date(1995, 5, 20),
        join_date=date(2024, 3, 1),
        reports_to="usr-leader",
        department_id="dep-tech",
        track_id="trk-eng",
        position_id="lnk-dev-jr",
        intern_level=InternLevel.B,
    )
