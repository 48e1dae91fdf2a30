from decimal import Decimal, InvalidOperation
from syndicate_ledger.domain.exceptions import (
    InvalidCommissionError, InvalidOddsError, InvalidStakeError,
    MissingCashOutError, OutcomeValidationError, UnsettledBetError,
)
from syndicate_ledger.domain.models import Bet, Outcome
from syndicate_ledger.domain.money import HUNDRED, ZERO, Number, to_money

class OutcomeCalculator:
    @staticmethod
    def expected_return(stake: Number, odds: Number) -> Decimal:
        return to_money(stake) * to_money(odds)

    @staticmethod
    def resolve(bet: Bet, commission_pct: Number) -> Outcome:
        """单注结算：先算毛利，再按佣金比例拆分（只拆利润，亏损全归合伙人）"""
        try:
            commission = to_money(commission_pct)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidCommissionError(f"commission must be a number, got {commission_pct!r}") from None
        OutcomeCalculator._validate(bet, commission)
        stake = to_money(bet.stake)

        if bet.status == "WON":
            final_return = stake * to_money(bet.odds)
            profit_gross = final_return - stake
        elif bet.status == "LOST":
            final_return = ZERO
            profit_gross = -stake
        elif bet.status == "CASHED_OUT":
            # 提前兑现：庄家实际付多少就是多少，可高于也可低于本金
            final_return = to_money(bet.cash_out_amount)
            profit_gross = final_return - stake
        elif bet.status == "VOID":
            final_return = stake
            profit_gross = ZERO
        else:
            raise OutcomeValidationError(f"bet {bet.bet_id}: unknown status {bet.status!r}")

        if profit_gross > 0:
            profit_admin = profit_gross * commission / HUNDRED
            profit_partner = profit_gross - profit_admin
        elif profit_gross < 0:
            profit_admin = ZERO
            profit_partner = profit_gross
        else:
            profit_admin = profit_partner = ZERO

        return Outcome(
            final_return=final_return, profit_gross=profit_gross,
            profit_partner=profit_partner, profit_admin=profit_admin,
        )

    @staticmethod
    def _validate(bet: Bet, commission: Decimal) -> None:
        if bet.status == "PENDING":
            raise UnsettledBetError(f"bet {bet.bet_id} is PENDING and has no monetary outcome yet")
        if bet.stake is None or to_money(bet.stake) < 0:
            raise InvalidStakeError(f"bet {bet.bet_id}: stake must be >= 0, got {bet.stake}")
        if bet.odds is None or to_money(bet.odds) < 1:
            raise InvalidOddsError(f"bet {bet.bet_id}: decimal odds must be >= 1.0, got {bet.odds}")
        if not commission.is_finite() or not (ZERO <= commission <= HUNDRED):
            raise InvalidCommissionError(f"commission must be within [0, 100], got {commission}")
        if bet.status == "CASHED_OUT" and bet.cash_out_amount is None:
            raise MissingCashOutError(f"bet {bet.bet_id} is CASHED_OUT but no cash-out amount was recorded")
        if bet.status == "CASHED_OUT" and to_money(bet.cash_out_amount) < 0:
            raise OutcomeValidationError(f"bet {bet.bet_id}: cash-out amount must be >= 0, got {bet.cash_out_amount}")

def resolve_bet_outcome(bet: Bet, commission_pct: Number) -> Outcome:
    return OutcomeCalculator.resolve(bet, commission_pct)
