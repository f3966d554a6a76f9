from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from ..common.datetime_utils import today_local
from ..core.enums import ProfileType
from ..core.exceptions import MembershipWriteError, ProvisioningError, ValidationError
from ..organization.repository import TeamMembershipRepository
from ..users.model import User
from .form import FormSnapshot
from .provisioning import AccountProvisioner, ProvisioningRequest
from .reference_data import ReferenceDataStore
from .resolver import apply_resets, is_eligible_supervisor, position_label, resolve
from .validator import validate

logger = logging.getLogger(__name__)


class RegistrationService:
    """Use case: register a new collaborator from a filled form.

    Steps run strictly in order: re-run the department -> track -> position
    cascade against the loaded reference data, validate, normalize, provision
    the account, write team memberships, refresh the cached user list. A
    membership failure deletes the freshly provisioned user again, so a failed
    submission never leaves a user without teams behind and can be retried.
    """

    def __init__(
        self,
        provisioner: AccountProvisioner,
        memberships: TeamMembershipRepository,
        reference: ReferenceDataStore,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._provisioner = provisioner
        self._memberships = memberships
        self._reference = reference
        self._clock = clock

    def resolve_cascade(self, snapshot: FormSnapshot) -> FormSnapshot:
        """Drop a track or position that does not belong to the selected department or track."""
        resolved = apply_resets(snapshot, resolve(self._reference.tracks, self._reference.positions, snapshot))
        if resolved is not snapshot:
            logger.info(
                "Dropped incompatible selection: track=%s position=%s (department=%s)",
                snapshot.track_id,
                snapshot.position_id,
                snapshot.department_id,
            )
        return resolved

    def validate(self, snapshot: FormSnapshot) -> dict[str, str]:
        snapshot = self.resolve_cascade(snapshot)
        errors = validate(snapshot, today=self._clock())
        if "reportsTo" not in errors and snapshot.reports_to and self._reference.users:
            if not is_eligible_supervisor(self._reference.users, snapshot.profile_type, snapshot.reports_to):
                errors["reportsTo"] = (
                    "Selecione um diretor" if snapshot.profile_type is ProfileType.LEADER else "Selecione um líder"
                )
        return errors

    def build_request(self, snapshot: FormSnapshot) -> ProvisioningRequest:
        label = position_label(self._reference.positions, snapshot.position_id)
        return ProvisioningRequest.from_snapshot(snapshot, position=label)

    def submit(self, snapshot: FormSnapshot) -> User:
        snapshot = self.resolve_cascade(snapshot)
        errors = self.validate(snapshot)
        if errors:
            raise ValidationError("Corrija os campos destacados", errors)

        request = self.build_request(snapshot)
        user = self._provision(request)

        if request.profile_type is not ProfileType.DIRECTOR and snapshot.team_ids:
            self._attach_teams(user, snapshot.team_ids)

        self._reference.reload_users()
        logger.info("Registered user %s (%s)", user.user_id, user.email)
        return user

    def _provision(self, request: ProvisioningRequest) -> User:
        try:
            return self._provisioner.create_user_with_auth(request)
        except ProvisioningError as e:
            logger.warning("Provisioning failed for %s: %s", request.email, e)
            raise
        except Exception as e:
            logger.exception("Provisioning failed for %s", request.email)
            raise ProvisioningError() from e

    def _attach_teams(self, user: User, team_ids: tuple[str, ...]) -> None:
        try:
            self._memberships.add_members(user_id=user.user_id, team_ids=team_ids)
        except Exception as e:
            logger.exception("Team membership write failed for user %s; rolling back", user.user_id)
            self._rollback_user(user.user_id)
            raise MembershipWriteError("Erro ao vincular o usuário aos times; o cadastro foi desfeito") from e

    def _rollback_user(self, user_id: str) -> None:
        try:
            self._provisioner.delete_user(user_id)
        except Exception as e:
            logger.exception("Could not delete user %s after membership failure", user_id)
            raise MembershipWriteError(
                f"Usuário {user_id} foi criado sem times e não pôde ser removido automaticamente"
            ) from e
