import datetime as dt
from decimal import Decimal
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

BetStatus = Literal["PENDING", "WON", "LOST", "CASHED_OUT", "VOID"]
WithdrawalStatus = Literal["REQUESTED", "APPROVED", "PAID", "REJECTED"]
FundScope = Literal["GENERAL", "PARTNER"]
LedgerCategory = Literal["DEPOSIT", "BET_STAKE", "BET_RETURN", "WITHDRAWAL"]

TERMINAL_BET_STATUSES = ("WON", "LOST", "CASHED_OUT", "VOID")

class Partner(BaseModel):
    model_config = ConfigDict(frozen=True)

    partner_id: str = Field(min_length=1)
    name: str
    # 合伙人让给管理员的利润百分比，只抽利润，不碰本金和亏损
    commission_pct: Decimal = Field(ge=0, le=100)
    status: Literal["ACTIVE", "INACTIVE"] = "ACTIVE"
    joined_date: Optional[dt.date] = None

    @property
    def is_active(self) -> bool:
        return self.status == "ACTIVE"

class Bet(BaseModel):
    model_config = ConfigDict(frozen=True)

    bet_id: str = Field(min_length=1)
    partner_id: str = Field(min_length=1)
    date: dt.date
    stake: Decimal = Field(ge=0)
    odds: Decimal = Field(ge=1)
    status: BetStatus = "PENDING"
    cash_out_amount: Optional[Decimal] = Field(default=None, ge=0)
    sport: Optional[str] = None
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    market: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _check_cash_out(self) -> "Bet":
        if self.status == "CASHED_OUT" and self.cash_out_amount is None:
            raise ValueError(f"bet {self.bet_id} is CASHED_OUT but has no cash_out_amount")
        if self.status != "CASHED_OUT" and self.cash_out_amount is not None:
            raise ValueError(f"bet {self.bet_id} is {self.status}; cash_out_amount is only valid for CASHED_OUT")
        return self

    @property
    def is_settled(self) -> bool:
        return self.status != "PENDING"

    @property
    def expected_return(self) -> Decimal:
        return self.stake * self.odds

    @property
    def event(self) -> str:
        if self.home_team or self.away_team:
            return f"{self.home_team or '?'} vs {self.away_team or '?'}"
        return self.market or self.bet_id

class Fund(BaseModel):
    model_config = ConfigDict(frozen=True)

    fund_id: str = Field(min_length=1)
    date: dt.date
    scope: FundScope = "PARTNER"
    partner_id: Optional[str] = None
    amount: Decimal = Field(gt=0)
    method: str = ""
    description: str = ""

    @model_validator(mode="after")
    def _check_scope(self) -> "Fund":
        if self.scope == "PARTNER" and not self.partner_id:
            raise ValueError(f"fund {self.fund_id} is PARTNER-scoped but has no partner_id")
        if self.scope == "GENERAL" and self.partner_id:
            raise ValueError(f"fund {self.fund_id} is GENERAL but references partner {self.partner_id}")
        return self

class Withdrawal(BaseModel):
    model_config = ConfigDict(frozen=True)

    withdrawal_id: str = Field(min_length=1)
    date: dt.date
    partner_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    status: WithdrawalStatus = "REQUESTED"
    receipt_url: Optional[str] = None

class Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    final_return: Decimal
    profit_gross: Decimal
    profit_partner: Decimal
    profit_admin: Decimal

class LedgerEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry_id: str
    record_id: str
    date: dt.date
    partner_name: str
    partner_known: bool = True
    description: str
    details: str = ""
    amount: Decimal
    category: LedgerCategory
    status: str
    running_balance: Decimal = Decimal("0")

class ScopeStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_deposited: Decimal
    total_withdrawn: Decimal
    # 必须与博彩公司真实账户余额对得上
    current_balance: Decimal
    total_staked: Decimal
    total_returned: Decimal
    gross_profit: Decimal
    partner_profit: Decimal
    admin_profit: Decimal
    pending_exposure: Decimal
    requested_withdrawals: Decimal
    win_rate: float
    avg_odds: float
    roi: float
    roas: float

class PartnerPerformance(BaseModel):
    model_config = ConfigDict(frozen=True)

    partner_id: str
    name: str
    commission_pct: Decimal
    gross_profit: Decimal
    admin_profit: Decimal
    partner_profit: Decimal
    roi: float
    partner_share_pct: float

class BalancePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    balance: Decimal
    description: str
