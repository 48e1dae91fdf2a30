import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
from pydantic import BaseModel, ValidationError
from syndicate_ledger.domain.exceptions import RecordParseError
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal

logger = logging.getLogger(__name__)

# 列顺序必须与表格里的完全一致
SHEET_COLUMNS = {
    "PARTNERS": ["partnerId", "name", "status", "partnerProfitPct", "joinedDate"],
    "BETS": ["betId", "partnerId", "date", "sport", "homeTeam", "awayTeam", "marketDescription",
             "oddsDecimal", "stakeCOP", "status", "cashoutReturnCOP", "notes"],
    "FUNDS": ["fundId", "date", "scope", "partnerId", "amountCOP", "method", "description"],
    "WITHDRAWALS": ["withdrawalId", "date", "partnerId", "amountCOP", "status", "receiptUrl"],
}

_CURRENCY_NOISE = re.compile(r"[$,\s]")

class RecordParser:
    """防腐层：把表格里的原始字符串洗成已校验的领域对象，坏数据直接报错而不是当成 0"""

    def row_to_dict(self, collection: str, row: Iterable[Any]) -> Dict[str, Any]:
        return dict(zip(SHEET_COLUMNS[collection], row))

    def parse_partner(self, row: Mapping[str, Any]) -> Partner:
        record_id = self._text(row.get("partnerId")) or "?"
        return self._build("PARTNERS", record_id, Partner, lambda: {
            "partner_id": record_id,
            "name": self._text(row.get("name")) or "",
            "status": (self._text(row.get("status")) or "ACTIVE").upper(),
            "commission_pct": self._number(row.get("partnerProfitPct"), "partnerProfitPct"),
            "joined_date": self._date(row.get("joinedDate")),
        })

    def parse_bet(self, row: Mapping[str, Any]) -> Bet:
        record_id = self._text(row.get("betId")) or "?"

        def fields():
            status = (self._text(row.get("status")) or "PENDING").upper()
            cash_out = self._number(row.get("cashoutReturnCOP"), "cashoutReturnCOP", required=False)
            # 表格对“没有兑现”一律写 0，只有 CASHED_OUT 的兑现金额才有意义
            if status != "CASHED_OUT" and not cash_out:
                cash_out = None
            return {
                "bet_id": record_id,
                "partner_id": self._text(row.get("partnerId")),
                "date": self._date(row.get("date")),
                "sport": self._text(row.get("sport")),
                "home_team": self._text(row.get("homeTeam")),
                "away_team": self._text(row.get("awayTeam")),
                "market": self._text(row.get("marketDescription")),
                "odds": self._number(row.get("oddsDecimal"), "oddsDecimal"),
                "stake": self._number(row.get("stakeCOP"), "stakeCOP"),
                "status": status,
                "cash_out_amount": cash_out,
                "notes": self._text(row.get("notes")),
            }
        return self._build("BETS", record_id, Bet, fields)

    def parse_fund(self, row: Mapping[str, Any]) -> Fund:
        record_id = self._text(row.get("fundId")) or "?"

        def fields():
            partner_id = self._text(row.get("partnerId"))
            scope = self._text(row.get("scope"))
            return {
                "fund_id": record_id,
                "date": self._date(row.get("date")),
                "scope": scope.upper() if scope else ("PARTNER" if partner_id else "GENERAL"),
                "partner_id": partner_id,
                "amount": self._number(row.get("amountCOP"), "amountCOP"),
                "method": self._text(row.get("method")) or "",
                "description": self._text(row.get("description")) or "",
            }
        return self._build("FUNDS", record_id, Fund, fields)

    def parse_withdrawal(self, row: Mapping[str, Any]) -> Withdrawal:
        record_id = self._text(row.get("withdrawalId")) or "?"
        return self._build("WITHDRAWALS", record_id, Withdrawal, lambda: {
            "withdrawal_id": record_id,
            "date": self._date(row.get("date")),
            "partner_id": self._text(row.get("partnerId")),
            "amount": self._number(row.get("amountCOP"), "amountCOP"),
            "status": (self._text(row.get("status")) or "REQUESTED").upper(),
            "receipt_url": self._text(row.get("receiptUrl")),
        })

    def parse_many(self, collection: str, rows: Iterable[Mapping[str, Any]]) -> List[BaseModel]:
        parser = {
            "PARTNERS": self.parse_partner, "BETS": self.parse_bet,
            "FUNDS": self.parse_fund, "WITHDRAWALS": self.parse_withdrawal,
        }[collection]
        records = [parser(row) for row in rows]
        logger.debug("parsed %d %s rows", len(records), collection)
        return records

    def _build(self, collection: str, record_id: str, model: type, fields: Callable[[], Dict[str, Any]]):
        try:
            return model(**fields())
        except (ValidationError, ValueError) as e:
            raise RecordParseError(collection, record_id, str(e)) from e

    @staticmethod
    def _text(value: Any) -> Optional[str]:
        if value is None: return None
        text = str(value).strip()
        return text or None

    def _number(self, value: Any, column: str, required: bool = True) -> Optional[Decimal]:
        text = self._text(value)
        if text is None:
            if required: raise ValueError(f"column {column} is required")
            return None
        try:
            return Decimal(_CURRENCY_NOISE.sub("", text))
        except InvalidOperation:
            raise ValueError(f"column {column}: {text!r} is not a number") from None

    def _date(self, value: Any) -> Optional[str]:
        text = self._text(value)
        # 只取日期部分，流水排序按天
        return text.split("T")[0].split(" ")[0] if text else None
