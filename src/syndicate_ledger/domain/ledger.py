import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple
from syndicate_ledger.config import settings
from syndicate_ledger.domain.calculator import OutcomeCalculator
from syndicate_ledger.domain.models import BalancePoint, Bet, Fund, LedgerEntry, Partner, Withdrawal
from syndicate_ledger.domain.money import ZERO, round_money
from syndicate_ledger.domain.scope import (
    ALL_PARTNERS, bet_in_scope, commission_for, fund_in_scope, index_partners, withdrawal_in_scope,
)

logger = logging.getLogger(__name__)

# 同一天内：先入金，再下注，再回款，最后出金
CATEGORY_ORDER = {"DEPOSIT": 1, "BET_STAKE": 2, "BET_RETURN": 3, "WITHDRAWAL": 4}

RETURN_DETAILS = {"WON": "Winnings", "LOST": "Total loss", "CASHED_OUT": "Early cash-out", "VOID": "Stake refunded"}

class LedgerBuilder:
    def build(self, bets: Sequence[Bet], funds: Sequence[Fund], withdrawals: Sequence[Withdrawal],
              scope: str = ALL_PARTNERS, partners: Sequence[Partner] = ()) -> List[LedgerEntry]:
        """生成带滚动余额的流水账，最新的在最前面"""
        partners_by_id = index_partners(partners)
        movements: List[Tuple[tuple, dict]] = []

        for fund in funds:
            if not fund_in_scope(fund, scope): continue
            name, known = self._partner_label(fund.partner_id, partners_by_id)
            movements.append(self._movement(
                entry_id=fund.fund_id, record_id=fund.fund_id, date=fund.date, category="DEPOSIT",
                partner_name=name, partner_known=known, amount=fund.amount, status="COMPLETED",
                description=f"Deposit: {fund.description}" if fund.description else "Deposit",
                details=fund.method,
            ))

        for w in withdrawals:
            if not withdrawal_in_scope(w, scope) or w.status != "PAID": continue
            name, known = self._partner_label(w.partner_id, partners_by_id)
            movements.append(self._movement(
                entry_id=w.withdrawal_id, record_id=w.withdrawal_id, date=w.date, category="WITHDRAWAL",
                partner_name=name, partner_known=known, amount=-w.amount, status=w.status,
                description="Profit withdrawal", details="Transfer",
            ))

        for bet in bets:
            if not bet_in_scope(bet, scope): continue
            name, known = self._partner_label(bet.partner_id, partners_by_id)

            # 下注那一刻本金就离开账户，不管结果如何
            movements.append(self._movement(
                entry_id=f"{bet.bet_id}-STAKE", record_id=bet.bet_id, date=bet.date, category="BET_STAKE",
                partner_name=name, partner_known=known, amount=-bet.stake, status=bet.status,
                description=f"Bet: {bet.event}", details=f"{bet.market or ''} @ {bet.odds}".strip(),
            ))
            if bet.status == "PENDING": continue

            # 输掉的注单也落一条 0 元回款，标记该注已结算
            outcome = OutcomeCalculator.resolve(bet, commission_for(bet, partners_by_id))
            movements.append(self._movement(
                entry_id=f"{bet.bet_id}-RETURN", record_id=bet.bet_id, date=bet.date, category="BET_RETURN",
                partner_name=name, partner_known=known, amount=outcome.final_return, status=bet.status,
                description="Cash-out confirmed" if bet.status == "CASHED_OUT" else "Bet return",
                details=RETURN_DETAILS[bet.status],
            ))

        movements.sort(key=lambda m: m[0])

        # 累计值保持精确，只对挂到每条流水上的余额取整，这样最新一条必然等于统计里的当前余额
        running = ZERO
        entries = []
        for _, fields in movements:
            running += fields["amount"]
            entries.append(LedgerEntry(running_balance=round_money(running), **fields))

        logger.debug("ledger for scope %s: %d entries, closing balance %s",
                     scope, len(entries), entries[-1].running_balance if entries else ZERO)
        entries.reverse()
        return entries

    @staticmethod
    def balance_history(entries: Sequence[LedgerEntry], max_points: Optional[int] = None) -> List[BalancePoint]:
        """给图表用的余额曲线：由旧到新，点数过多时等距抽稀"""
        max_points = max_points or settings.BALANCE_HISTORY_POINTS
        chronological = list(reversed(entries))
        points = [BalancePoint(date=e.date, balance=e.running_balance, description=e.description) for e in chronological]
        if len(points) <= max_points: return points
        step = math.ceil(len(points) / max_points)
        return [p for i, p in enumerate(points) if i % step == 0]

    @staticmethod
    def _movement(**fields) -> Tuple[tuple, dict]:
        key = (fields["date"], CATEGORY_ORDER[fields["category"]], str(fields["record_id"]), str(fields["entry_id"]))
        return key, fields

    @staticmethod
    def _partner_label(partner_id: Optional[str], partners_by_id: Dict[str, Partner]) -> Tuple[str, bool]:
        if not partner_id: return settings.GENERAL_FUND_LABEL, True
        partner = partners_by_id.get(str(partner_id))
        if partner is None: return settings.UNKNOWN_PARTNER_LABEL, False
        return partner.name, True

def build_ledger(bets: Sequence[Bet], funds: Sequence[Fund], withdrawals: Sequence[Withdrawal],
                 scope: str = ALL_PARTNERS, partners: Sequence[Partner] = ()) -> List[LedgerEntry]:
    return LedgerBuilder().build(bets, funds, withdrawals, scope, partners)
