import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal
from syndicate_ledger.domain.money import ZERO

logger = logging.getLogger(__name__)

# 全盘视角；其他任何值都视为单个合伙人 ID
ALL_PARTNERS = "ALL"

def is_book_wide(scope: str) -> bool:
    return scope == ALL_PARTNERS

def _belongs(partner_id: Optional[str], scope: str) -> bool:
    if is_book_wide(scope): return True
    return partner_id is not None and str(partner_id) == str(scope)

def bet_in_scope(bet: Bet, scope: str) -> bool:
    return _belongs(bet.partner_id, scope)

def fund_in_scope(fund: Fund, scope: str) -> bool:
    """GENERAL 资金没有归属人，只在全盘视角里出现"""
    return _belongs(fund.partner_id, scope)

def withdrawal_in_scope(withdrawal: Withdrawal, scope: str) -> bool:
    return _belongs(withdrawal.partner_id, scope)

def index_partners(partners: Iterable[Partner]) -> Dict[str, Partner]:
    return {str(p.partner_id): p for p in partners}

def commission_for(bet: Bet, partners_by_id: Dict[str, Partner]) -> Decimal:
    """找不到合伙人时按 0 佣金结算：不报错，利润全记在合伙人名下"""
    partner = partners_by_id.get(str(bet.partner_id))
    if partner is None:
        logger.warning("bet %s references unknown partner %s; settling with 0%% commission", bet.bet_id, bet.partner_id)
        return ZERO
    return partner.commission_pct
