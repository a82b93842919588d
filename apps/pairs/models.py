# apps/pairs/models.py
from django.db import models

from apps.companies.models import Company

from .profit_loss import calculate_profit_loss


PRICE_FIELD = dict(max_digits=28, decimal_places=8)
# (price difference) x (share count) on both legs must fit
PROFIT_LOSS_FIELD = dict(max_digits=40, decimal_places=8)

# PositiveIntegerField column limit
MAX_SHARES = 2147483647


class PairQuerySet(models.QuerySet):

    def with_company(self):
        return self.select_related('company')

    def with_stock_codes(self):
        """Pairs whose both legs carry a stock code (the grouping key)"""
        return (
            self.exclude(buy_stock_code__isnull=True)
            .exclude(buy_stock_code='')
            .exclude(sell_stock_code__isnull=True)
            .exclude(sell_stock_code='')
        )


class Pair(models.Model):
    """Paired long (buy) / short (sell) equity position"""

    PROFIT_LOSS_FIELDS = ['buy_profit_loss', 'sell_profit_loss', 'profit_loss']

    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name='pairs'
    )

    name = models.CharField(max_length=255)
    link = models.CharField(max_length=2048, null=True, blank=True)
    analysis_record = models.TextField(null=True, blank=True)

    # Legs
    buy_shares = models.PositiveIntegerField()
    sell_shares = models.PositiveIntegerField()
    buy_price = models.DecimalField(**PRICE_FIELD)
    sell_price = models.DecimalField(**PRICE_FIELD)

    buy_stock_code = models.CharField(max_length=20, null=True, blank=True)
    sell_stock_code = models.CharField(max_length=20, null=True, blank=True)

    # Latest market prices, entered by the user
    current_buy_price = models.DecimalField(null=True, blank=True, **PRICE_FIELD)
    current_sell_price = models.DecimalField(null=True, blank=True, **PRICE_FIELD)

    # Derived, null until the settlement computation runs
    buy_profit_loss = models.DecimalField(null=True, blank=True, **PROFIT_LOSS_FIELD)
    sell_profit_loss = models.DecimalField(null=True, blank=True, **PROFIT_LOSS_FIELD)
    profit_loss = models.DecimalField(null=True, blank=True, **PROFIT_LOSS_FIELD)

    is_settled = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PairQuerySet.as_manager()

    class Meta:
        db_table = 'pairs'
        indexes = [
            models.Index(fields=['buy_stock_code', 'sell_stock_code'], name='pairs_buy_sto_7c1e2a_idx'),
            models.Index(fields=['company', 'is_settled'], name='pairs_company_4b8d90_idx'),
        ]
        ordering = ['id']

    def __str__(self):
        return f"{self.name} ({self.buy_stock_code or '-'} / {self.sell_stock_code or '-'})"

    def recalculate_profit_loss(self) -> bool:
        """
        Recompute the three P/L fields from the current prices.

        Only settled pairs with both current prices change; otherwise the
        stored values stay as they are. Returns True when the fields were set.
        """
        if not self.is_settled:
            return False

        result = calculate_profit_loss(
            self.buy_price,
            self.buy_shares,
            self.current_buy_price,
            self.sell_price,
            self.sell_shares,
            self.current_sell_price,
        )
        if result is None:
            return False

        self.buy_profit_loss = result.buy
        self.sell_profit_loss = result.sell
        self.profit_loss = result.total
        return True
