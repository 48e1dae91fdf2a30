import pytest
from pydantic import ValidationError
from conftest import make_bet, make_withdrawal
from syndicate_ledger.domain.exceptions import InvalidTransitionError, MissingCashOutError
from syndicate_ledger.domain.lifecycle import advance_withdrawal, settle_bet

def test_settle_pending_bet_returns_new_record():
    bet = make_bet(status="PENDING")
    won = settle_bet(bet, "WON")
    assert won.status == "WON"
    assert bet.status == "PENDING"
    assert won.bet_id == bet.bet_id

def test_settle_cash_out_needs_amount():
    with pytest.raises(MissingCashOutError):
        settle_bet(make_bet(), "CASHED_OUT")
    assert settle_bet(make_bet(), "CASHED_OUT", 7500).cash_out_amount == 7500

def test_cash_out_amount_rejected_for_other_outcomes():
    with pytest.raises(ValidationError):
        settle_bet(make_bet(), "LOST", 100)

def test_bet_settles_exactly_once():
    with pytest.raises(InvalidTransitionError):
        settle_bet(make_bet(status="LOST"), "WON")
    with pytest.raises(InvalidTransitionError):
        settle_bet(make_bet(), "PENDING")

@pytest.mark.parametrize("start,target", [("REQUESTED", "APPROVED"), ("REQUESTED", "REJECTED"), ("APPROVED", "PAID")])
def test_allowed_withdrawal_transitions(start, target):
    assert advance_withdrawal(make_withdrawal(status=start), target).status == target

@pytest.mark.parametrize("start,target", [
    ("REQUESTED", "PAID"), ("APPROVED", "REJECTED"), ("PAID", "REQUESTED"),
    ("REJECTED", "APPROVED"), ("PAID", "PAID"),
])
def test_forbidden_withdrawal_transitions(start, target):
    with pytest.raises(InvalidTransitionError):
        advance_withdrawal(make_withdrawal(status=start), target)
