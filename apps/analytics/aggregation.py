# ===== apps/analytics/aggregation.py =====
"""
Grouping of pairs that trade the same (buy, sell) stock-code combination.

The key is ordered: (A, B) and (B, A) are different groups. A key held by a
single pair is reported as a unique pair, two or more make a duplicate group.
Pairs missing either stock code take no part in the report.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Tuple

from apps.pairs.profit_loss import sum_amounts


@dataclass
class DuplicatePairGroup:
    buy_stock_code: str
    sell_stock_code: str
    pairs: List = field(default_factory=list)

    @property
    def stock_codes(self):
        return {
            "buyStockCode": self.buy_stock_code,
            "sellStockCode": self.sell_stock_code,
        }

    @property
    def total_profit_loss(self) -> Decimal:
        return sum_amounts(p.profit_loss for p in self.pairs)


@dataclass
class DuplicatePairReport:
    groups: List[DuplicatePairGroup]
    unique_pairs: List

    @property
    def total_profit_loss(self) -> Decimal:
        return sum_amounts(
            [g.total_profit_loss for g in self.groups]
            + [p.profit_loss for p in self.unique_pairs]
        )


def has_stock_codes(pair) -> bool:
    return bool(pair.buy_stock_code) and bool(pair.sell_stock_code)


def group_duplicate_pairs(pairs) -> DuplicatePairReport:
    buckets: Dict[Tuple[str, str], DuplicatePairGroup] = {}

    for pair in pairs:
        if not has_stock_codes(pair):
            continue

        key = (pair.buy_stock_code, pair.sell_stock_code)
        if key not in buckets:
            buckets[key] = DuplicatePairGroup(*key)
        buckets[key].pairs.append(pair)

    groups = []
    unique_pairs = []
    # dicts keep insertion order, so groups follow their first member
    for group in buckets.values():
        if len(group.pairs) == 1:
            unique_pairs.append(group.pairs[0])
        else:
            groups.append(group)

    return DuplicatePairReport(groups=groups, unique_pairs=unique_pairs)
