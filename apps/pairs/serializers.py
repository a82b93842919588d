# ===== apps/pairs/serializers.py =====
from decimal import Decimal, ROUND_HALF_UP, localcontext

from rest_framework import serializers
from rest_framework.fields import empty

from apps.companies.models import Company
from apps.companies.serializers import CompanySerializer

from .models import Pair, PRICE_FIELD, PROFIT_LOSS_FIELD, MAX_SHARES


def _price_field(**kwargs):
    return serializers.DecimalField(**PRICE_FIELD, **kwargs)


class PriceField(serializers.DecimalField):
    """
    Any decimal number, rounded half-up to the stored scale.

    Only the integer part is bounded by the column width.
    """

    def __init__(self, **kwargs):
        super().__init__(max_digits=None, decimal_places=None, **kwargs)
        self.max_whole_digits = PRICE_FIELD["max_digits"] - PRICE_FIELD["decimal_places"]
        self.scale = Decimal(1).scaleb(-PRICE_FIELD["decimal_places"])

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value.adjusted() >= self.max_whole_digits:
            self.fail("max_whole_digits", max_whole_digits=self.max_whole_digits)

        with localcontext() as ctx:
            ctx.prec = PRICE_FIELD["max_digits"] + 2
            value = value.quantize(self.scale, rounding=ROUND_HALF_UP)

        # rounding may carry into a new integer digit
        if value.adjusted() >= self.max_whole_digits:
            self.fail("max_whole_digits", max_whole_digits=self.max_whole_digits)
        return value


class BlankableDecimalField(PriceField):
    """Decimal input where an empty string means "no value"."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)


class OptionalTextField(serializers.CharField):
    """Optional text stored as NULL when blank."""

    def __init__(self, **kwargs):
        kwargs.setdefault("required", False)
        kwargs.setdefault("allow_blank", True)
        kwargs.setdefault("allow_null", True)
        super().__init__(**kwargs)

    def run_validation(self, data=empty):
        value = super().run_validation(data)
        return value or None


# ============================================================
# 1. INPUT (create / update body)
# ============================================================

class PairInputSerializer(serializers.Serializer):
    """
    Full-replace body of a pair update.

    Field names follow the JSON contract (camelCase), validated_data is
    keyed by model attribute names through ``source``.
    """

    name = serializers.CharField(max_length=255)
    link = OptionalTextField(max_length=2048)
    analysisRecord = OptionalTextField(source="analysis_record")

    buyShares = serializers.IntegerField(source="buy_shares", min_value=1, max_value=MAX_SHARES)
    sellShares = serializers.IntegerField(source="sell_shares", min_value=1, max_value=MAX_SHARES)
    buyPrice = PriceField(source="buy_price")
    sellPrice = PriceField(source="sell_price")

    buyStockCode = OptionalTextField(source="buy_stock_code", max_length=20)
    sellStockCode = OptionalTextField(source="sell_stock_code", max_length=20)

    # absent / null / blank -> keep the stored price
    currentBuyPrice = BlankableDecimalField(
        source="current_buy_price",
        required=False, allow_null=True,
    )
    currentSellPrice = BlankableDecimalField(
        source="current_sell_price",
        required=False, allow_null=True,
    )

    NUMERIC_FIELDS = ("buyShares", "sellShares", "buyPrice", "sellPrice")
    BOUNDED_FIELDS = NUMERIC_FIELDS + ("currentBuyPrice", "currentSellPrice")
    RANGE_CODES = {"max_value", "max_whole_digits"}

    @classmethod
    def error_message(cls, errors):
        if "name" in errors:
            return "Pair name is required"
        if any(
            getattr(detail, "code", None) in cls.RANGE_CODES
            for field in cls.BOUNDED_FIELDS
            for detail in errors.get(field, [])
        ):
            return "Shares and prices are out of range"
        if any(field in errors for field in cls.NUMERIC_FIELDS):
            return "Shares and prices must be numeric"
        if "currentBuyPrice" in errors or "currentSellPrice" in errors:
            return "Current prices must be numeric"
        if "companyId" in errors:
            return "A valid companyId is required"
        return "Invalid pair data"


class PairCreateSerializer(PairInputSerializer):
    companyId = serializers.PrimaryKeyRelatedField(
        source="company",
        queryset=Company.objects.all(),
    )
    isSettled = serializers.BooleanField(source="is_settled", required=False, default=False)


class PairSettlementSerializer(serializers.Serializer):
    isSettled = serializers.BooleanField(source="is_settled", required=False, default=True)


# ============================================================
# 2. OUTPUT
# ============================================================

class PairSerializer(serializers.ModelSerializer):
    analysisRecord = serializers.CharField(source="analysis_record", read_only=True)

    buyShares = serializers.IntegerField(source="buy_shares", read_only=True)
    sellShares = serializers.IntegerField(source="sell_shares", read_only=True)
    buyPrice = _price_field(source="buy_price", read_only=True)
    sellPrice = _price_field(source="sell_price", read_only=True)

    buyStockCode = serializers.CharField(source="buy_stock_code", read_only=True)
    sellStockCode = serializers.CharField(source="sell_stock_code", read_only=True)

    currentBuyPrice = _price_field(source="current_buy_price", read_only=True)
    currentSellPrice = _price_field(source="current_sell_price", read_only=True)

    buyProfitLoss = serializers.DecimalField(
        source="buy_profit_loss", read_only=True, **PROFIT_LOSS_FIELD
    )
    sellProfitLoss = serializers.DecimalField(
        source="sell_profit_loss", read_only=True, **PROFIT_LOSS_FIELD
    )
    profitLoss = serializers.DecimalField(
        source="profit_loss", read_only=True, **PROFIT_LOSS_FIELD
    )

    isSettled = serializers.BooleanField(source="is_settled", read_only=True)
    companyId = serializers.IntegerField(source="company_id", read_only=True)
    company = CompanySerializer(read_only=True)

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Pair
        fields = [
            "id",
            "name",
            "link",
            "analysisRecord",

            "buyShares",
            "sellShares",
            "buyPrice",
            "sellPrice",

            "buyStockCode",
            "sellStockCode",

            "currentBuyPrice",
            "currentSellPrice",

            "buyProfitLoss",
            "sellProfitLoss",
            "profitLoss",

            "isSettled",
            "companyId",
            "company",

            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["id", "name", "link"]
