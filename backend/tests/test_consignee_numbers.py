import re

from app.services import consignee_numbers
from app.services.consignee_numbers import generate_consignee_number


def test_format_is_prefix_millis_and_suffix(monkeypatch):
    monkeypatch.setattr(consignee_numbers.time, "time", lambda: 1_700_000_000.123)
    monkeypatch.setattr(consignee_numbers.random, "randint", lambda a, b: 999)

    assert generate_consignee_number() == "CN1700000000123999"


def test_suffix_is_not_zero_padded(monkeypatch):
    monkeypatch.setattr(consignee_numbers.time, "time", lambda: 1_700_000_000.0)
    monkeypatch.setattr(consignee_numbers.random, "randint", lambda a, b: 7)

    assert generate_consignee_number() == "CN17000000000007"


def test_custom_prefix():
    assert re.fullmatch(r"XX\d{14,16}", generate_consignee_number(prefix="XX"))


def test_default_prefix_and_digits_only():
    assert re.fullmatch(r"CN\d+", generate_consignee_number())
