from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..core.enums import ProfileType
from ..core.exceptions import MembershipWriteError, ProvisioningError, ValidationError
from ..container import Container
from .form import FormSnapshot
from .provisioning import user_to_payload
from .reducer import (
    DepartmentSelected,
    FieldChanged,
    PositionSelected,
    ProfileTypeChanged,
    ReferenceDataChanged,
    TeamToggled,
    TrackSelected,
    reduce,
)
from .resolver import resolve, supervisor_candidates

logger = logging.getLogger(__name__)


def _event_from_json(data):
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Evento inválido")
    kind = data.get("type", "")
    if kind == "department":
        return DepartmentSelected(str(data.get("value") or ""))
    if kind == "track":
        return TrackSelected(str(data.get("value") or ""))
    if kind == "position":
        return PositionSelected(str(data.get("value") or ""))
    if kind == "profileType":
        value = data.get("value")
        return ProfileTypeChanged(ProfileType(value) if value else None)
    if kind == "team":
        return TeamToggled(str(data.get("value") or ""))
    if kind == "field":
        return FieldChanged(str(data.get("field") or ""), data.get("value"))
    if not kind:
        return ReferenceDataChanged()
    raise ValidationError(f"Evento desconhecido: {kind}")


def _form_view(container: Container, snapshot: FormSnapshot) -> dict:
    store = container.reference_store
    resolution = resolve(store.tracks, store.positions, snapshot)
    return {
        "form": snapshot.to_payload(),
        "tracks": [asdict(t) for t in resolution.filtered_tracks],
        "positions": [
            {"id": p.link_id, "label": p.label, "orderIndex": p.order_index, "trackId": p.track_id}
            for p in resolution.filtered_positions
        ],
        "supervisors": [
            {"id": u.user_id, "label": u.display_label}
            for u in supervisor_candidates(store.users, snapshot.profile_type)
        ],
    }


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Corpo da requisição inválido")
        return body

    @app.route("/api/registration/options", methods=["GET"], endpoint="registration_options")
    def registration_options():
        store = container.reference_store
        store.ensure_loaded()
        return jsonify(
            {
                "success": True,
                "ready": store.is_ready,
                "failures": store.failures,
                "departments": [asdict(d) for d in store.departments],
                "teams": [asdict(t) for t in store.teams],
            }
        )

    @app.route("/api/registration/reference/reload", methods=["POST"], endpoint="registration_reload")
    def registration_reload():
        container.reference_store.reload()
        return jsonify({"success": True, "failures": container.reference_store.failures})

    @app.route("/api/registration/resolve", methods=["POST"], endpoint="registration_resolve")
    def registration_resolve():
        body = _json_body()
        container.reference_store.ensure_loaded()
        form = body.get("form") or {}
        if not isinstance(form, dict):
            raise ValidationError("Formulário inválido")
        snapshot = FormSnapshot.from_payload(form)
        try:
            snapshot = reduce(snapshot, _event_from_json(body.get("event")), container.reference_store)
        except (KeyError, ValueError) as e:
            raise ValidationError(f"Evento inválido: {e}")
        return jsonify({"success": True, **_form_view(container, snapshot)})

    @app.route("/api/registration/validate", methods=["POST"], endpoint="registration_validate")
    def registration_validate():
        snapshot = FormSnapshot.from_payload(_json_body())
        container.reference_store.ensure_loaded()
        errors = container.registration_service.validate(snapshot)
        return jsonify({"success": not errors, "errors": errors})

    @app.route("/api/registration/users", methods=["POST"], endpoint="registration_submit")
    def registration_submit():
        snapshot = FormSnapshot.from_payload(_json_body())
        container.reference_store.ensure_loaded()
        try:
            user = container.registration_service.submit(snapshot)
        except (ProvisioningError, MembershipWriteError) as e:
            return jsonify({"success": False, "error": str(e)}), 502
        except ValidationError:
            raise
        except Exception:
            logger.exception("Unexpected error while registering %s", snapshot.email)
            return jsonify({"success": False, "error": ProvisioningError.GENERIC_MESSAGE}), 500

        return jsonify({"success": True, "message": "Usuário criado com sucesso!", "user": user_to_payload(user)}), 201
