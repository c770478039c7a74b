from __future__ import annotations

from decimal import Decimal

from smsledger.core.amounts import extract_amount, is_amount_in_range


def test_currency_tagged_amount_beats_reference_number() -> None:
    assert extract_amount("Rs. 500.00 debited, ref 123456789") == Decimal("500.00")


def test_thousands_separators_are_removed() -> None:
    assert extract_amount("INR 1,25,000.50 credited to A/c XX99") == Decimal("125000.50")


def test_rupee_symbol_and_label_patterns() -> None:
    assert extract_amount("₹ 99 paid to the canteen") == Decimal("99")
    assert extract_amount("Amt: 100.50") == Decimal("100.50")


def test_bare_decimal_fallback() -> None:
    assert extract_amount("Account debited by 399.00 for recharge") == Decimal("399.00")


def test_bare_integer_fallback() -> None:
    assert extract_amount("Paid 500 for groceries") == Decimal("500")


def test_no_digits_means_no_amount() -> None:
    for body in ["", "Hello world this is a text without numbers", "Rs. debited", "₹₹₹ !!"]:
        assert extract_amount(body) is None


def test_phone_numbers_and_single_digits_are_not_amounts() -> None:
    assert extract_amount("Call 9876543210 now") is None
    assert extract_amount("Step 9 done") is None


def test_range_bounds_are_inclusive() -> None:
    assert not is_amount_in_range(Decimal("0.99"))
    assert is_amount_in_range(Decimal("1"))
    assert is_amount_in_range(Decimal("100000000"))
    assert not is_amount_in_range(Decimal("100000000.01"))
