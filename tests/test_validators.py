import base64
from datetime import date

import pytest

from src.talent_hub.talent_hub.common.datetime_utils import add_years, calculate_age
from src.talent_hub.talent_hub.common.validators import (
    check_profile_image,
    format_phone,
    is_valid_email,
    is_valid_phone,
    profile_image_size,
    require_min_length,
    require_non_empty,
)
from src.talent_hub.talent_hub.core.exceptions import ValidationError


def test_require_non_empty_strips():
    assert require_non_empty("  Ana ", "Nome") == "Ana"
    with pytest.raises(ValidationError, match="Nome é obrigatório"):
        require_non_empty("   ", "Nome")


def test_require_min_length():
    assert require_min_length("123456", "Senha", 6) == "123456"
    with pytest.raises(ValidationError):
        require_min_length("12345", "Senha", 6)


def test_email_and_phone_shapes():
    assert is_valid_email("ana@example.com")
    assert not is_valid_email("ana@example")
    assert is_valid_phone("(11) 91234-5678")
    assert not is_valid_phone("11912345678")


def test_format_phone_masks_only_complete_numbers():
    assert format_phone("(11)91234-5678") == "(11) 91234-5678"
    assert format_phone("1191234") == "1191234"
    assert format_phone("abc") == ""


def test_profile_image_size():
    data_url = "data:image/jpeg;base64," + base64.b64encode(b"x" * 300).decode()
    assert profile_image_size(data_url) == 300
    assert check_profile_image(None) is None

    with pytest.raises(ValidationError, match="Imagem de perfil inválida"):
        profile_image_size("data:text/plain;base64,eA==")
    with pytest.raises(ValidationError, match="Imagem de perfil inválida"):
        profile_image_size("data:image/png;base64,***")


def test_calculate_age_counts_birthday_on_the_day():
    assert calculate_age(date(2000, 10, 18), today=date(2026, 10, 18)) == 26
    assert calculate_age(date(2000, 10, 19), today=date(2026, 10, 18)) == 25


def test_add_years_rolls_leap_day_forward():
    assert add_years(date(2008, 2, 29), 16) == date(2024, 2, 29)
    assert add_years(date(2008, 2, 29), 17) == date(2025, 3, 1)
