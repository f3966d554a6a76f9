from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .development.mysql_action_plan_repository import MySQLActionPlanRepository
from .development.service import DevelopmentPlanService
from .evaluations.mysql_evaluation_repository import MySQLEvaluationCycleRepository, MySQLEvaluationRepository
from .evaluations.service import EvaluationService
from .organization.mysql_department_repository import MySQLDepartmentRepository
from .organization.mysql_team_repository import MySQLTeamMembershipRepository, MySQLTeamRepository
from .organization.mysql_track_repository import (
    MySQLJobPositionRepository,
    MySQLTrackPositionRepository,
    MySQLTrackRepository,
)
from .registration.api_client import HttpAccountProvisioner
from .registration.mysql_provisioner import MySQLAccountProvisioner
from .registration.provisioning import AccountProvisioner
from .registration.reference_data import ReferenceDataStore
from .registration.service import RegistrationService
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    reference_store: ReferenceDataStore
    provisioner: AccountProvisioner
    registration_service: RegistrationService
    evaluation_service: EvaluationService
    development_service: DevelopmentPlanService


def build_container(
    *,
    db_config: dict,
    provisioning_api_url: Optional[str] = None,
    provisioning_api_timeout: float = 10.0,
    reference_load_workers: int = 4,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_settings(db_config))
    users = MySQLUserRepository(conn)
    departments = MySQLDepartmentRepository(conn)

    reference_store = ReferenceDataStore(
        users=users,
        teams=MySQLTeamRepository(conn),
        departments=departments,
        tracks=MySQLTrackRepository(conn),
        track_positions=MySQLTrackPositionRepository(conn),
        job_positions=MySQLJobPositionRepository(conn),
        max_workers=reference_load_workers,
    )

    provisioner: AccountProvisioner
    if provisioning_api_url:
        provisioner = HttpAccountProvisioner(provisioning_api_url, timeout=provisioning_api_timeout)
    else:
        provisioner = MySQLAccountProvisioner(conn)

    registration_service = RegistrationService(
        provisioner,
        MySQLTeamMembershipRepository(conn),
        reference_store,
    )

    return Container(
        conn=conn,
        reference_store=reference_store,
        provisioner=provisioner,
        registration_service=registration_service,
        evaluation_service=EvaluationService(MySQLEvaluationCycleRepository(conn), MySQLEvaluationRepository(conn)),
        development_service=DevelopmentPlanService(MySQLActionPlanRepository(conn), users, departments),
    )
