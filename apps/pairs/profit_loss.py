# ===== apps/pairs/profit_loss.py =====
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Optional


@dataclass(frozen=True)
class ProfitLoss:
    buy: Decimal
    sell: Decimal
    total: Decimal


def calculate_profit_loss(
    buy_price: Decimal,
    buy_shares: int,
    current_buy_price: Optional[Decimal],
    sell_price: Decimal,
    sell_shares: int,
    current_sell_price: Optional[Decimal],
) -> Optional[ProfitLoss]:
    """
    Realized P/L of both legs at the current market prices.

    Long leg earns when the price rises, short leg earns when it falls.
    Returns None while either current price is unknown.
    """
    if current_buy_price is None or current_sell_price is None:
        return None

    with localcontext() as ctx:
        # wide enough that the products are never rounded
        ctx.prec = 60
        buy = (Decimal(current_buy_price) - Decimal(buy_price)) * buy_shares
        sell = (Decimal(sell_price) - Decimal(current_sell_price)) * sell_shares
        total = buy + sell
    return ProfitLoss(buy=buy, sell=sell, total=total)


def as_amount(value) -> Decimal:
    """Missing P/L counts as zero in every sum."""
    if value is None:
        return Decimal("0")
    return Decimal(value)


def sum_amounts(values) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 60
        return sum((as_amount(v) for v in values), Decimal("0"))
