import datetime as dt
from decimal import Decimal
import pytest
from syndicate_ledger.domain.models import Bet, Fund, Partner, Withdrawal

D1 = dt.date(2024, 3, 1)
D2 = dt.date(2024, 3, 2)
D3 = dt.date(2024, 3, 3)

def make_bet(bet_id="B1", partner_id="P1", date=D2, stake=10000, odds="2.0", status="PENDING", cash_out=None, **extra):
    return Bet(bet_id=bet_id, partner_id=partner_id, date=date, stake=Decimal(stake), odds=Decimal(odds),
               status=status, cash_out_amount=None if cash_out is None else Decimal(cash_out), **extra)

def make_fund(fund_id="F1", partner_id="P1", date=D1, amount=100000, **extra):
    scope = "PARTNER" if partner_id else "GENERAL"
    return Fund(fund_id=fund_id, partner_id=partner_id, scope=scope, date=date, amount=Decimal(amount), **extra)

def make_withdrawal(withdrawal_id="W1", partner_id="P1", date=D3, amount=5000, status="PAID"):
    return Withdrawal(withdrawal_id=withdrawal_id, partner_id=partner_id, date=date, amount=Decimal(amount), status=status)

@pytest.fixture
def partners():
    return [
        Partner(partner_id="P1", name="Andrea", commission_pct=Decimal("50")),
        Partner(partner_id="P2", name="Bruno", commission_pct=Decimal("30")),
    ]

@pytest.fixture
def book(partners):
    """两个合伙人 + 一笔公共资金 + 各种状态的注单"""
    bets = [
        make_bet("B1", "P1", D2, 20000, "2.0", "WON"),
        make_bet("B2", "P1", D2, 10000, "3.0", "LOST"),
        make_bet("B3", "P2", D2, 10000, "1.5", "CASHED_OUT", cash_out=8000),
        make_bet("B4", "P2", D3, 5000, "2.5", "VOID"),
        make_bet("B5", "P1", D3, 7000, "1.8", "PENDING"),
        make_bet("B6", "P2", D3, 4000, "4.0", "CASHED_OUT", cash_out=6000),
    ]
    funds = [
        make_fund("F1", "P1", D1, 100000),
        make_fund("F2", "P2", D1, 50000),
        make_fund("F3", None, D1, 30000, description="House float"),
    ]
    withdrawals = [
        make_withdrawal("W1", "P1", D3, 5000, "PAID"),
        make_withdrawal("W2", "P2", D3, 2000, "REQUESTED"),
        make_withdrawal("W3", "P2", D3, 1000, "REJECTED"),
    ]
    return {"bets": bets, "partners": partners, "funds": funds, "withdrawals": withdrawals}
