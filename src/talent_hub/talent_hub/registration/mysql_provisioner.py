from __future__ import annotations

import logging
import uuid

from werkzeug.security import generate_password_hash

from ..core.exceptions import ProvisioningError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..users.model import User
from .provisioning import AccountProvisioner, ProvisioningRequest

logger = logging.getLogger(__name__)


class MySQLAccountProvisioner(AccountProvisioner):
    """Provision accounts straight into the application database.

    The identity (`auth_identities`) and the profile (`users`) are written in
    one transaction, so a failure leaves neither behind. Nothing here touches
    the Flask session of the admin doing the registration.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_user_with_auth(self, request: ProvisioningRequest) -> User:
        user_id = str(uuid.uuid4())
        payload = request.to_payload()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id FROM auth_identities WHERE email=%s", (request.email,))
            if fetchone(cur):
                raise ProvisioningError("Email já cadastrado")

            cur.execute(
                "INSERT INTO auth_identities(id, email, password_hash) VALUES(%s,%s,%s)",
                (user_id, request.email, generate_password_hash(request.password)),
            )
            cur.execute(
                """
                INSERT INTO users(
                    id, name, email, position, is_leader, is_director, phone, birth_date, join_date,
                    profile_image, reports_to, department_id, track_id, position_id,
                    intern_level, contract_type, active
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    user_id,
                    request.name,
                    request.email,
                    request.position,
                    int(payload["is_leader"]),
                    int(payload["is_director"]),
                    request.phone,
                    request.birth_date,
                    request.join_date,
                    request.profile_image,
                    request.reports_to,
                    request.department_id,
                    request.track_id,
                    request.position_id,
                    request.intern_level.value,
                    request.contract_type.value,
                ),
            )

        logger.info("Provisioned user %s (%s)", user_id, request.email)
        return User(
            user_id=user_id,
            name=request.name,
            email=request.email,
            position=request.position,
            profile_type=request.profile_type,
            intern_level=request.intern_level,
            contract_type=request.contract_type,
            phone=request.phone,
            birth_date=request.birth_date,
            join_date=request.join_date,
            profile_image=request.profile_image,
            reports_to=request.reports_to,
            department_id=request.department_id,
            track_id=request.track_id,
            position_id=request.position_id,
        )

    def delete_user(self, user_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM team_members WHERE user_id=%s", (user_id,))
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            cur.execute("DELETE FROM auth_identities WHERE id=%s", (user_id,))
        logger.info("Deleted provisioned user %s", user_id)
