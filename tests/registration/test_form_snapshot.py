from __future__ import annotations

from datetime import date

import pytest

from src.talent_hub.talent_hub.core.enums import ContractType, InternLevel, ProfileType
from src.talent_hub.talent_hub.core.exceptions import ValidationError
from src.talent_hub.talent_hub.registration.form import FormSnapshot


def test_defaults():
    snapshot = FormSnapshot()
    assert snapshot.profile_type is ProfileType.REGULAR
    assert snapshot.intern_level is InternLevel.A
    assert snapshot.contract_type is ContractType.CLT
    assert snapshot.team_ids == ()
    assert snapshot.join_date is not None


def test_blank_clears_defaults():
    snapshot = FormSnapshot.blank()
    assert snapshot.profile_type is None
    assert snapshot.join_date is None
    assert snapshot.intern_level is None


def test_from_payload_converts_client_values():
    snapshot = FormSnapshot.from_payload(
        {
            "name": "Maria",
            "profileType": "leader",
            "teamIds": ["t1", "t2", "t1"],
            "birthDate": "1990-01-31",
            "joinDate": "",
            "internLevel": "D",
            "contractType": "PJ",
            "profileImage": "",
            "reportsTo": None,
        }
    )
    assert snapshot.profile_type is ProfileType.LEADER
    assert snapshot.team_ids == ("t1", "t2")
    assert snapshot.birth_date == date(1990, 1, 31)
    assert snapshot.join_date is None
    assert snapshot.intern_level is InternLevel.D
    assert snapshot.contract_type is ContractType.PJ
    assert snapshot.profile_image is None
    assert snapshot.reports_to == ""


def test_from_payload_collects_every_bad_field():
    with pytest.raises(ValidationError) as exc:
        FormSnapshot.from_payload({"profileType": "boss", "joinDate": "yesterday", "teamIds": "t1"})
    assert exc.value.errors == {
        "profileType": "Valor inválido",
        "joinDate": "Valor inválido",
        "teamIds": "Valor inválido",
    }


def test_to_payload_hides_the_password_by_default(valid_snapshot):
    payload = valid_snapshot.to_payload()
    assert "password" not in payload
    assert payload["birthDate"] == "1995-05-20"
    assert payload["teamIds"] == ["team-platform", "team-payments"]
    assert valid_snapshot.to_payload(include_password=True)["password"] == "segredo1"
