from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from syndicate_ledger.config import settings

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
# 记账币种没有辅币单位，最小单位就是 1
CURRENCY_UNIT = Decimal("1")

def to_money(value: Number) -> Decimal:
    if isinstance(value, Decimal): return value
    # float 先转 str，避免二进制尾差混进账本
    if isinstance(value, float): return Decimal(str(value))
    return Decimal(value)

def round_money(value: Number) -> Decimal:
    return to_money(value).quantize(CURRENCY_UNIT, rounding=ROUND_HALF_UP)

def percentage(part: Decimal, whole: Decimal) -> float:
    """除零保护：分母为 0 时返回 0，而不是 NaN"""
    if not whole: return 0.0
    return float(part / whole * HUNDRED)

def format_currency(amount: Number) -> str:
    """1234567 -> '$ 1.234.567'，负数 -> '-$ 1.234.567'"""
    rounded = round_money(amount)
    grouped = f"{abs(int(rounded)):,}".replace(",", settings.THOUSANDS_SEPARATOR)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{settings.CURRENCY_SYMBOL} {grouped}"
