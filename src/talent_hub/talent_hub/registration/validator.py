from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import add_years, calculate_age, today_local
from ..common.validators import check_profile_image, is_valid_email, is_valid_phone
from ..core.constants import MAX_AGE, MIN_PASSWORD_LENGTH, MIN_WORKING_AGE
from ..core.enums import ProfileType
from ..core.exceptions import ValidationError
from .form import FormSnapshot


def validate(snapshot: FormSnapshot, *, today: Optional[date] = None) -> dict[str, str]:
    """Map every violated rule to its field-level message.

    Rules are independent and all of them run; an empty mapping means the
    snapshot may be submitted.
    """
    today = today or today_local()
    errors: dict[str, str] = {}

    if not snapshot.name.strip():
        errors["name"] = "Nome é obrigatório"

    # The shape checks see the raw value, so they override "required" for
    # whitespace-only input and reject surrounding blanks.
    if not snapshot.email.strip():
        errors["email"] = "Email é obrigatório"
    if snapshot.email and not is_valid_email(snapshot.email):
        errors["email"] = "Email inválido"

    if not snapshot.password.strip():
        errors["password"] = "Senha é obrigatória"
    if snapshot.password and len(snapshot.password) < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres"

    if not snapshot.department_id:
        errors["departmentId"] = "Departamento é obrigatório"
    if not snapshot.track_id:
        errors["trackId"] = "Trilha é obrigatória"
    if not snapshot.position_id:
        errors["positionId"] = "Cargo é obrigatório"
    if not snapshot.intern_level:
        errors["internLevel"] = "Internível é obrigatório"

    if snapshot.phone and not is_valid_phone(snapshot.phone):
        errors["phone"] = "Telefone inválido"

    if snapshot.birth_date:
        age = calculate_age(snapshot.birth_date, today=today)
        if age < MIN_WORKING_AGE:
            errors["birthDate"] = f"Idade mínima: {MIN_WORKING_AGE} anos"
        elif age > MAX_AGE:
            errors["birthDate"] = "Data de nascimento inválida"

    join_error = _join_date_error(snapshot, today)
    if join_error:
        errors["joinDate"] = join_error

    if not snapshot.team_ids and snapshot.profile_type is not ProfileType.DIRECTOR:
        errors["teams"] = "Selecione pelo menos um time"

    if not snapshot.reports_to:
        if snapshot.profile_type is ProfileType.REGULAR:
            errors["reportsTo"] = "Selecione um líder"
        elif snapshot.profile_type is ProfileType.LEADER:
            errors["reportsTo"] = "Selecione um diretor"

    if snapshot.profile_image:
        try:
            check_profile_image(snapshot.profile_image)
        except ValidationError as e:
            errors["profileImage"] = str(e)

    return errors


def _join_date_error(snapshot: FormSnapshot, today: date) -> Optional[str]:
    join_date = snapshot.join_date
    if not join_date:
        return "Data de admissão é obrigatória"
    if snapshot.birth_date and join_date < add_years(snapshot.birth_date, MIN_WORKING_AGE):
        return f"Data de admissão inválida (colaborador teria menos de {MIN_WORKING_AGE} anos)"
    if join_date > today:
        return "Data de admissão não pode ser futura"
    return None


def is_valid(snapshot: FormSnapshot, *, today: Optional[date] = None) -> bool:
    return not validate(snapshot, today=today)
