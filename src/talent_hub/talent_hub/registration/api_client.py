from __future__ import annotations

import logging
from typing import Optional

import requests

from ..core.exceptions import ProvisioningError
from ..users.model import User
from .provisioning import AccountProvisioner, ProvisioningRequest, user_from_payload

logger = logging.getLogger(__name__)


class HttpAccountProvisioner(AccountProvisioner):
    """Provision accounts through the backend REST API.

    The backend creates the auth identity with its service credentials, so the
    calling admin's own session is never exchanged for the new user's.
    """

    def __init__(self, base_url: str, *, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/")
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def create_user_with_auth(self, request: ProvisioningRequest) -> User:
        url = f"{self._base_url}/users/create-with-auth"
        try:
            response = self._session.post(url, json=request.to_payload(), timeout=self._timeout)
        except requests.RequestException as e:
            logger.error("Provisioning request to %s failed: %s", url, e)
            raise ProvisioningError() from e

        if not response.ok:
            message = _error_message(response)
            logger.warning("Provisioning rejected (%s): %s", response.status_code, message)
            raise ProvisioningError(message)

        try:
            body = response.json()
            data = body.get("user", body) if isinstance(body, dict) else None
            if not isinstance(data, dict):
                raise ValueError("unexpected body")
            return user_from_payload(data)
        except (ValueError, KeyError) as e:
            logger.error("Provisioning returned an unreadable user: %s", e)
            raise ProvisioningError() from e

    def delete_user(self, user_id: str) -> None:
        url = f"{self._base_url}/users/{user_id}"
        response = self._session.delete(url, timeout=self._timeout)
        if not response.ok:
            raise ProvisioningError(_error_message(response))


def _error_message(response: requests.Response) -> Optional[str]:
    """The `error` field of a JSON error body, when the backend sent one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error") or body.get("message")
        if isinstance(error, str) and error.strip():
            return error
    return None
