import csv
import datetime as dt
import io
from decimal import Decimal
from typing import List, Optional, Sequence
import pandas as pd
from syndicate_ledger.config import settings
from syndicate_ledger.domain.calculator import OutcomeCalculator
from syndicate_ledger.domain.models import Bet, Partner
from syndicate_ledger.domain.money import ZERO, percentage
from syndicate_ledger.domain.scope import commission_for, index_partners
from syndicate_ledger.domain.stats import counts_as_win

DETAIL_COLUMNS = ["ID", "Date", "Event", "Market", "Odds", "Stake", "Status", "Return", "Net Profit"]

class ReportFormatter:
    """导出 CSV 业绩报表：表头 + 执行摘要 + 明细"""

    def filter_bets(self, bets: Sequence[Bet], date_from: Optional[dt.date] = None,
                    date_to: Optional[dt.date] = None) -> List[Bet]:
        return [
            b for b in bets
            if (date_from is None or b.date >= date_from) and (date_to is None or b.date <= date_to)
        ]

    def build_detail(self, bets: Sequence[Bet], partners: Sequence[Partner] = ()) -> pd.DataFrame:
        partners_by_id = index_partners(partners)
        rows = []
        for b in bets:
            ret = profit = ZERO
            if b.is_settled:
                outcome = OutcomeCalculator.resolve(b, commission_for(b, partners_by_id) if partners else ZERO)
                ret, profit = outcome.final_return, outcome.profit_gross
            rows.append({
                "ID": b.bet_id, "Date": b.date.isoformat(), "Event": b.event, "Market": b.market or "",
                "Odds": b.odds, "Stake": b.stake, "Status": b.status, "Return": ret, "Net Profit": profit,
            })
        return pd.DataFrame(rows, columns=DETAIL_COLUMNS)

    def render(self, bets: Sequence[Bet], partner_name: str, date_from: Optional[dt.date] = None,
               date_to: Optional[dt.date] = None, generated_on: Optional[dt.date] = None,
               partners: Sequence[Partner] = ()) -> str:
        generated_on = generated_on or dt.date.today()
        selected = self.filter_bets(bets, date_from, date_to)
        detail = self.build_detail(selected, partners)

        settled = [b for b in selected if b.is_settled]
        total_staked = sum((b.stake for b in selected), ZERO)
        total_profit: Decimal = sum(detail["Net Profit"].tolist(), ZERO)
        win_rate = sum(1 for b in settled if counts_as_win(b)) / len(settled) * 100 if settled else 0.0
        # 报表口径：ROI 按区间内全部投注本金计算（含未结算）
        roi = percentage(total_profit, total_staked)

        period_from = date_from.isoformat() if date_from else "Start"
        period_to = date_to.isoformat() if date_to else "Today"
        header = [
            [settings.REPORT_TITLE],
            ["Partner:", partner_name],
            ["Generated:", generated_on.isoformat()],
            ["Period:", f"{period_from} to {period_to}"],
            [],
            ["EXECUTIVE SUMMARY"],
            ["Total operations:", len(selected)],
            ["Capital staked:", total_staked],
            ["Win rate:", f"{win_rate:.2f}%"],
            ["ROI:", f"{roi:.2f}%"],
            ["Net profit:", total_profit],
            [],
        ]

        buffer = io.StringIO()
        # 表头和明细走同一套 CSV 转义规则
        csv.writer(buffer, lineterminator="\n").writerows(header)
        detail.to_csv(buffer, index=False, lineterminator="\n")
        return buffer.getvalue()

    @staticmethod
    def report_filename(partner_name: str, generated_on: Optional[dt.date] = None) -> str:
        generated_on = generated_on or dt.date.today()
        safe_name = "_".join(partner_name.split()) or "ALL"
        return f"Report_{safe_name}_{generated_on.isoformat()}.csv"
