from __future__ import annotations

from smsledger.core.identity import (
    describe,
    extract_institution,
    extract_merchant,
    is_financial_sender,
)


def test_institution_from_known_sender_codes() -> None:
    assert extract_institution("VM-HDFCBK") == "HDFC Bank"
    assert extract_institution("AX-SBIINB") == "SBI"
    assert extract_institution("JIO") == "Jio"
    assert extract_institution("vm-paytmb") == "Paytm"


def test_unknown_sender_drops_routing_prefix() -> None:
    assert extract_institution("AD-ZOMATO") == "ZOMATO"
    assert extract_institution("ACMECO") == "ACMECO"


def test_merchant_after_at() -> None:
    body = "Rs.500.00 debited from A/c XX1234 on 05-01-24 at SWIGGY. Avl Bal Rs 4500.00"
    assert extract_merchant(body) == "SWIGGY"


def test_merchant_upi_address() -> None:
    body = "Rs 250 debited from A/c XX12 to swiggy@ybl on 05-01"
    assert extract_merchant(body) == "swiggy@ybl"


def test_merchant_vpa_label() -> None:
    assert extract_merchant("Sent Rs 100. VPA: rahul.k@okaxis Ref 1234") == "rahul.k@okaxis"


def test_short_merchant_is_ignored() -> None:
    assert extract_merchant("Paid Rs 50 to AB.") is None


def test_no_merchant_falls_back_to_snippet() -> None:
    body = "Rs 100 debited"
    assert extract_merchant(body) is None
    assert describe(None, body, 6) == "Rs 100"
    assert describe("SWIGGY", body, 6) == "SWIGGY"


def test_known_financial_sender() -> None:
    assert is_financial_sender("VM-HDFCBK")
    assert is_financial_sender("jd-icicib")
    assert not is_financial_sender("AD-ZOMATO")


def test_multi_word_merchant_stops_at_terminator() -> None:
    assert extract_merchant("Rs 799 paid to Amazon Pay India on 05-01") == "Amazon Pay India"
    assert extract_merchant("Rs 199 debited for Netflix Premium.") == "Netflix Premium"


def test_merchant_ignores_trailing_whitespace() -> None:
    assert extract_merchant("Rs 500 debited at SWIGGY" + " " * 50) == "SWIGGY"
