from __future__ import annotations

from ethparser.ingestion.match import match_transactions
from ethparser.models import Transaction


def _t(sender: str, receiver: str, value: str = "1") -> Transaction:
    return Transaction(from_=sender, to=receiver, value=value)


def test_returns_subset_touching_address_in_block_order() -> None:
    t1, t2, t3, t4 = _t("0xA", "0xB"), _t("0xC", "0xD"), _t("0xE", "0xA"), _t("0xA", "0xF")
    matches = match_transactions({"0xA"}, [t1, t2, t3, t4])
    assert matches == [("0xA", t1), ("0xA", t3), ("0xA", t4)]


def test_transfer_between_two_subscribed_addresses_is_recorded_under_both() -> None:
    t1 = _t("0xA", "0xB")
    assert match_transactions({"0xA", "0xB"}, [t1]) == [("0xA", t1), ("0xB", t1)]


def test_self_transfer_is_recorded_once() -> None:
    t1 = _t("0xA", "0xA")
    assert match_transactions({"0xA"}, [t1]) == [("0xA", t1)]


def test_matching_is_case_sensitive() -> None:
    assert match_transactions({"0xa"}, [_t("0xA", "0xB")]) == []


def test_no_subscriptions_means_no_matches() -> None:
    assert match_transactions(frozenset(), [_t("0xA", "0xB")]) == []


def test_identical_transactions_are_not_deduplicated() -> None:
    t1 = _t("0xA", "0xB")
    assert match_transactions({"0xB"}, [t1, t1]) == [("0xB", t1), ("0xB", t1)]
