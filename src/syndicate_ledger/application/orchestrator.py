import datetime as dt
import logging
from typing import List, Optional
from syndicate_ledger.application.report import ReportFormatter
from syndicate_ledger.config import settings
from syndicate_ledger.domain.exceptions import ReconciliationError
from syndicate_ledger.domain.ledger import LedgerBuilder
from syndicate_ledger.domain.models import BalancePoint, LedgerEntry, PartnerPerformance, ScopeStats
from syndicate_ledger.domain.money import format_currency
from syndicate_ledger.domain.scope import ALL_PARTNERS, bet_in_scope, index_partners, is_book_wide
from syndicate_ledger.domain.stats import StatsAggregator
from syndicate_ledger.infrastructure.logger import setup_logger
from syndicate_ledger.infrastructure.stores.base import BaseRecordStore
from syndicate_ledger.infrastructure.stores.csv_store import CsvRecordStore

logger = logging.getLogger(__name__)

class SyndicateOrchestrator:
    """每次读都从存储拿一份新快照全量重算，不缓存任何中间状态"""

    def __init__(self, store: Optional[BaseRecordStore] = None):
        setup_logger()
        self.store = store or CsvRecordStore()
        self.stats = StatsAggregator()
        self.ledger_builder = LedgerBuilder()
        self.report = ReportFormatter()

    def dashboard(self, scope: str = ALL_PARTNERS) -> ScopeStats:
        snap = self.store.load_snapshot()
        return self.stats.aggregate(snap.bets, snap.partners, scope, snap.funds, snap.withdrawals)

    def ledger(self, scope: str = ALL_PARTNERS) -> List[LedgerEntry]:
        snap = self.store.load_snapshot()
        return self.ledger_builder.build(snap.bets, snap.funds, snap.withdrawals, scope, snap.partners)

    def balance_history(self, scope: str = ALL_PARTNERS, max_points: Optional[int] = None) -> List[BalancePoint]:
        return self.ledger_builder.balance_history(self.ledger(scope), max_points)

    def partner_performance(self) -> List[PartnerPerformance]:
        snap = self.store.load_snapshot()
        return self.stats.partner_performance(snap.bets, snap.partners, snap.funds, snap.withdrawals)

    def reconcile(self, scope: str = ALL_PARTNERS) -> ScopeStats:
        """两条独立算出来的余额必须一致，否则说明账本逻辑出了问题"""
        snap = self.store.load_snapshot()
        stats = self.stats.aggregate(snap.bets, snap.partners, scope, snap.funds, snap.withdrawals)
        entries = self.ledger_builder.build(snap.bets, snap.funds, snap.withdrawals, scope, snap.partners)
        ledger_balance = entries[0].running_balance if entries else stats.current_balance
        if ledger_balance != stats.current_balance:
            logger.error("scope %s out of balance: ledger %s vs stats %s", scope, ledger_balance, stats.current_balance)
            raise ReconciliationError(
                f"scope {scope}: ledger closes at {ledger_balance} but stats report {stats.current_balance}"
            )
        logger.info("scope %s reconciled at %s (store=%s)", scope, format_currency(stats.current_balance), self.store.name)
        return stats

    def export_report(self, scope: str = ALL_PARTNERS, date_from: Optional[dt.date] = None,
                      date_to: Optional[dt.date] = None, generated_on: Optional[dt.date] = None) -> str:
        snap = self.store.load_snapshot()
        if is_book_wide(scope):
            partner_name = "ALL"
        else:
            partner = index_partners(snap.partners).get(str(scope))
            partner_name = partner.name if partner else settings.UNKNOWN_PARTNER_LABEL
        bets = [b for b in snap.bets if bet_in_scope(b, scope)]
        return self.report.render(bets, partner_name, date_from, date_to, generated_on, snap.partners)
