from typing import Dict, Optional, Tuple
from syndicate_ledger.domain.exceptions import InvalidTransitionError, MissingCashOutError
from syndicate_ledger.domain.models import TERMINAL_BET_STATUSES, Bet, BetStatus, Withdrawal, WithdrawalStatus
from syndicate_ledger.domain.money import Number

# REJECTED 和 PAID 是终态
WITHDRAWAL_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "REQUESTED": ("APPROVED", "REJECTED"),
    "APPROVED": ("PAID",),
    "PAID": (),
    "REJECTED": (),
}

def settle_bet(bet: Bet, status: BetStatus, cash_out_amount: Optional[Number] = None) -> Bet:
    """PENDING -> 终态，只允许一次。重开注单请直接用同一 ID 重新写入"""
    if bet.status != "PENDING":
        raise InvalidTransitionError(f"bet {bet.bet_id} is already settled as {bet.status}")
    if status not in TERMINAL_BET_STATUSES:
        raise InvalidTransitionError(f"bet {bet.bet_id} cannot be settled as {status}")
    if status == "CASHED_OUT" and cash_out_amount is None:
        raise MissingCashOutError(f"bet {bet.bet_id}: a cash-out needs the amount actually paid")
    return Bet.model_validate({**bet.model_dump(), "status": status, "cash_out_amount": cash_out_amount})

def advance_withdrawal(withdrawal: Withdrawal, status: WithdrawalStatus) -> Withdrawal:
    allowed = WITHDRAWAL_TRANSITIONS.get(withdrawal.status, ())
    if status not in allowed:
        raise InvalidTransitionError(
            f"withdrawal {withdrawal.withdrawal_id} cannot move from {withdrawal.status} to {status}"
        )
    return Withdrawal.model_validate({**withdrawal.model_dump(), "status": status})
