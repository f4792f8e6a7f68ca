"""Classification of raw feed transactions into journal operations."""

from coop_banker.classifier import canonical_name, classify, classify_all, select_new
from coop_banker.models import BankInterest, PlayerPurse, Transaction, TransactionAction


def _tx(amount, timestamp, action="DEPOSIT", name="alice"):
    return Transaction(
        amount=amount,
        timestamp=timestamp,
        action=TransactionAction(action),
        initiator_name=name,
    )


def test_canonical_name_strips_colour_code():
    assert canonical_name("§aalice") == "alice"
    assert canonical_name("§6Bank Interest") == "Bank Interest"


def test_canonical_name_keeps_plain_and_multibyte_names():
    assert canonical_name("alice") == "alice"
    assert canonical_name("§bélodie") == "élodie"
    assert canonical_name("") == ""


def test_withdraw_is_negated_purse_operation():
    ts, op = classify(_tx(250.0, 1000, action="WITHDRAW", name="§cbob"))
    assert ts == 1000
    assert op == PlayerPurse(amount=-250.0, username="bob", repeat_count=1)


def test_deposit_is_purse_operation():
    _, op = classify(_tx(99.5, 1, name="carol"))
    assert op == PlayerPurse(amount=99.5, username="carol", repeat_count=1)


def test_bank_interest_labels():
    _, op = classify(_tx(12.0, 1, name="Bank Interest"))
    assert op == BankInterest(amount=12.0)
    _, op = classify(_tx(24.0, 1, name="Bank Interest (x2)"))
    assert op == BankInterest(amount=24.0)


def test_bank_interest_recognised_after_canonicalisation():
    _, op = classify(_tx(3.0, 1, name="§6Bank Interest"))
    assert isinstance(op, BankInterest)


def test_withdraw_by_bank_interest_label_stays_a_purse_operation():
    _, op = classify(_tx(3.0, 1, action="WITHDRAW", name="Bank Interest"))
    assert op == PlayerPurse(amount=-3.0, username="Bank Interest", repeat_count=1)


def test_select_new_is_strict_and_keeps_feed_order():
    feed = [_tx(1, 300), _tx(1, 200), _tx(1, 100), _tx(1, 50)]
    picked = select_new(feed, cursor=100)
    assert [tx.timestamp for tx in picked] == [300, 200]


def test_classify_all_preserves_order():
    feed = [_tx(5, 3, name="a"), _tx(7, 2, action="WITHDRAW", name="b")]
    assert [ts for ts, _ in classify_all(feed)] == [3, 2]


def test_negative_bank_interest_deposit_does_not_raise():
    ts, op = classify(_tx(-1.0, 7, name="Bank Interest"))
    assert ts == 7
    assert op == PlayerPurse(amount=-1.0, username="Bank Interest", repeat_count=1)
