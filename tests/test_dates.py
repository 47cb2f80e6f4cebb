from datetime import date

import pytest

from storefront.errors import ValidationError
from storefront.services.slots import parse_pickup_date


def test_parses_iso_date():
    assert parse_pickup_date("2024-01-02") == date(2024, 1, 2)


@pytest.mark.parametrize("value", [
    "2024-01-02\n",
    " 2024-01-02",
    "２０２４-01-02",  # fullwidth digits
    "2024-٠١-02",  # Arabic-Indic digits
    "2024-1-2",
    "",
    None,
])
def test_rejects_anything_but_ascii_yyyy_mm_dd(value):
    with pytest.raises(ValidationError, match="Invalid date format"):
        parse_pickup_date(value)


def test_rejects_impossible_date():
    with pytest.raises(ValidationError, match="Invalid calendar date"):
        parse_pickup_date("2023-02-29")
