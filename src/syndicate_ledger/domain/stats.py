import logging
from typing import List, Optional, Sequence
from syndicate_ledger.config import settings
from syndicate_ledger.domain.calculator import OutcomeCalculator
from syndicate_ledger.domain.models import Bet, Fund, Partner, PartnerPerformance, ScopeStats, Withdrawal
from syndicate_ledger.domain.money import ZERO, percentage, round_money
from syndicate_ledger.domain.scope import (
    ALL_PARTNERS, bet_in_scope, commission_for, fund_in_scope, index_partners, withdrawal_in_scope,
)

logger = logging.getLogger(__name__)

def counts_as_win(bet: Bet) -> bool:
    # 兑现金额必须严格高于本金才算赢（按原始口径，不看扣佣后的利润）
    if bet.status == "WON": return True
    return bet.status == "CASHED_OUT" and bet.cash_out_amount is not None and bet.cash_out_amount > bet.stake

class StatsAggregator:
    def __init__(self, house_partner_id: Optional[str] = None):
        self.house_partner_id = house_partner_id if house_partner_id is not None else settings.HOUSE_PARTNER_ID

    def aggregate(self, bets: Sequence[Bet], partners: Sequence[Partner], scope: str = ALL_PARTNERS,
                  funds: Sequence[Fund] = (), withdrawals: Sequence[Withdrawal] = ()) -> ScopeStats:
        partners_by_id = index_partners(partners)
        scoped_bets = [b for b in bets if bet_in_scope(b, scope)]
        scoped_funds = [f for f in funds if fund_in_scope(f, scope)]
        scoped_withdrawals = [w for w in withdrawals if withdrawal_in_scope(w, scope)]

        # 1-3. 初始资金池 = 入金 - 已打款的出金
        total_deposited = sum((f.amount for f in scoped_funds), ZERO)
        total_withdrawn = sum((w.amount for w in scoped_withdrawals if w.status == "PAID"), ZERO)
        requested_withdrawals = sum((w.amount for w in scoped_withdrawals if w.status == "REQUESTED"), ZERO)
        base_capital = total_deposited - total_withdrawn

        # 4. 注单现金流：下注即出账，只有结算后才有回款
        total_staked = total_returned = gross_profit = partner_profit = admin_profit = ZERO
        pending_exposure = settled_stake = ZERO
        settled_count = wins = 0

        for bet in scoped_bets:
            total_staked += bet.stake
            if bet.status == "PENDING":
                pending_exposure += bet.stake
                continue

            outcome = OutcomeCalculator.resolve(bet, commission_for(bet, partners_by_id))
            total_returned += outcome.final_return
            gross_profit += outcome.profit_gross
            partner_profit += outcome.profit_partner
            admin_profit += outcome.profit_admin

            settled_count += 1
            settled_stake += bet.stake
            if counts_as_win(bet): wins += 1

        # 5. 真实账户余额（与博彩公司后台对账的那个数）
        current_balance = round_money(base_capital - total_staked + total_returned)
        logger.debug("scope %s: %d bets (%d settled), balance %s", scope, len(scoped_bets), settled_count, current_balance)

        win_rate = wins / settled_count * 100 if settled_count else 0.0
        avg_odds = float(sum((b.odds for b in scoped_bets), ZERO) / len(scoped_bets)) if scoped_bets else 0.0

        return ScopeStats(
            total_deposited=total_deposited, total_withdrawn=total_withdrawn,
            current_balance=current_balance, total_staked=total_staked, total_returned=total_returned,
            gross_profit=gross_profit, partner_profit=partner_profit, admin_profit=admin_profit,
            pending_exposure=pending_exposure, requested_withdrawals=requested_withdrawals,
            win_rate=win_rate, avg_odds=avg_odds,
            roi=percentage(gross_profit, settled_stake), roas=percentage(total_returned, settled_stake),
        )

    def partner_performance(self, bets: Sequence[Bet], partners: Sequence[Partner],
                            funds: Sequence[Fund] = (), withdrawals: Sequence[Withdrawal] = ()) -> List[PartnerPerformance]:
        """合伙人业绩榜：按毛利从高到低排序（排除庄家自营账户）"""
        rows = []
        for partner in partners:
            if self.house_partner_id is not None and partner.partner_id == self.house_partner_id:
                continue
            stats = self.aggregate(bets, partners, partner.partner_id, funds, withdrawals)
            rows.append(PartnerPerformance(
                partner_id=partner.partner_id, name=partner.name, commission_pct=partner.commission_pct,
                gross_profit=stats.gross_profit, admin_profit=stats.admin_profit,
                partner_profit=stats.partner_profit, roi=stats.roi,
                partner_share_pct=percentage(stats.partner_profit, stats.gross_profit) if stats.gross_profit > 0 else 0.0,
            ))
        return sorted(rows, key=lambda r: (-r.gross_profit, r.partner_id))

def aggregate_stats(bets: Sequence[Bet], partners: Sequence[Partner], scope: str = ALL_PARTNERS,
                    funds: Sequence[Fund] = (), withdrawals: Sequence[Withdrawal] = ()) -> ScopeStats:
    return StatsAggregator().aggregate(bets, partners, scope, funds, withdrawals)
