# ===== apps/pairs/services.py =====
import logging
from dataclasses import dataclass

from django.db import transaction, DatabaseError

from .exceptions import InvalidArgument, PairNotFound, ServiceUnavailable
from .models import Pair
from .serializers import (
    PairInputSerializer,
    PairCreateSerializer,
    PairSettlementSerializer,
)

logger = logging.getLogger(__name__)

# Written on every full-replace update
UPDATE_FIELDS = [
    "name",
    "link",
    "analysis_record",
    "buy_shares",
    "sell_shares",
    "buy_price",
    "sell_price",
    "buy_stock_code",
    "sell_stock_code",
    "current_buy_price",
    "current_sell_price",
    *Pair.PROFIT_LOSS_FIELDS,
    "updated_at",
]

OPTIONAL_TEXT_FIELDS = ("link", "analysis_record", "buy_stock_code", "sell_stock_code")


@dataclass(frozen=True)
class RecalculationResult:
    total_processed: int
    success_count: int
    error_count: int


def parse_pair_id(raw_id) -> int:
    """Pair ids are non-negative integers; anything else is rejected."""
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        if raw_id < 0:
            raise InvalidArgument("Invalid pair id")
        return raw_id

    text = str(raw_id).strip() if raw_id is not None else ""
    if not text.isascii() or not text.isdigit():
        raise InvalidArgument("Invalid pair id")
    return int(text)


def _validated(serializer_class, data):
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        raise InvalidArgument(
            serializer_class.error_message(serializer.errors),
            details=serializer.errors,
        )
    return serializer.validated_data


class PairService:
    """CRUD over pairs plus the settlement P/L computation."""

    # ============================================================
    # READ
    # ============================================================
    def get_pair(self, raw_id) -> Pair:
        pair_id = parse_pair_id(raw_id)

        pair = Pair.objects.with_company().filter(pk=pair_id).first()
        if pair is None:
            raise PairNotFound()
        return pair

    def list_pairs(self, company_id=None):
        pairs = Pair.objects.with_company()

        if company_id not in (None, ""):
            if not str(company_id).isdigit():
                raise InvalidArgument("Invalid company id")
            pairs = pairs.filter(company_id=int(company_id))

        return pairs.order_by("id")

    # ============================================================
    # CREATE
    # ============================================================
    def create_pair(self, data) -> Pair:
        values = _validated(PairCreateSerializer, data)

        pair = Pair(
            company=values["company"],
            name=values["name"],
            buy_shares=values["buy_shares"],
            sell_shares=values["sell_shares"],
            buy_price=values["buy_price"],
            sell_price=values["sell_price"],
            current_buy_price=values.get("current_buy_price"),
            current_sell_price=values.get("current_sell_price"),
            is_settled=values.get("is_settled", False),
        )
        for field in OPTIONAL_TEXT_FIELDS:
            setattr(pair, field, values.get(field))

        pair.recalculate_profit_loss()
        pair.save()

        logger.info("Created pair id=%s for company id=%s", pair.pk, pair.company_id)
        return pair

    # ============================================================
    # UPDATE (full replace)
    # ============================================================
    def update_pair(self, raw_id, data) -> Pair:
        pair_id = parse_pair_id(raw_id)

        with transaction.atomic():
            pair = Pair.objects.with_company().filter(pk=pair_id).first()
            if pair is None:
                raise PairNotFound()

            values = _validated(PairInputSerializer, data)

            pair.name = values["name"]
            for field in OPTIONAL_TEXT_FIELDS:
                setattr(pair, field, values.get(field))

            pair.buy_shares = values["buy_shares"]
            pair.sell_shares = values["sell_shares"]
            pair.buy_price = values["buy_price"]
            pair.sell_price = values["sell_price"]

            # a supplied current price replaces the stored one, otherwise keep it
            for field in ("current_buy_price", "current_sell_price"):
                if values.get(field) is not None:
                    setattr(pair, field, values[field])

            if pair.recalculate_profit_loss():
                logger.debug("Recomputed profit/loss for pair id=%s: %s", pair.pk, pair.profit_loss)

            pair.save(update_fields=UPDATE_FIELDS)

        return pair

    def set_settled(self, raw_id, data) -> Pair:
        pair_id = parse_pair_id(raw_id)
        serializer = PairSettlementSerializer(data=data)
        if not serializer.is_valid():
            raise InvalidArgument("isSettled must be a boolean", details=serializer.errors)
        is_settled = serializer.validated_data["is_settled"]

        with transaction.atomic():
            pair = Pair.objects.with_company().filter(pk=pair_id).first()
            if pair is None:
                raise PairNotFound()

            pair.is_settled = is_settled
            pair.recalculate_profit_loss()
            pair.save(update_fields=["is_settled", *Pair.PROFIT_LOSS_FIELDS, "updated_at"])

        logger.info("Pair id=%s settled=%s", pair.pk, pair.is_settled)
        return pair

    # ============================================================
    # DELETE
    # ============================================================
    def delete_pair(self, raw_id) -> None:
        pair_id = parse_pair_id(raw_id)

        if not Pair.objects.filter(pk=pair_id).exists():
            raise PairNotFound()

        Pair.objects.filter(pk=pair_id).delete()
        logger.info("Deleted pair id=%s", pair_id)

    # ============================================================
    # BULK RECALCULATION
    # ============================================================
    def recalculate_all_profit_loss(self) -> RecalculationResult:
        """
        Recompute and save P/L for every stored pair.

        Each pair is its own unit of work: a failure is logged and counted,
        and the remaining pairs are still processed. Only a failure to list
        the pairs aborts the run.
        """
        try:
            pair_ids = list(Pair.objects.order_by("id").values_list("id", flat=True))
        except DatabaseError as e:
            logger.exception("Could not enumerate pairs for recalculation")
            raise ServiceUnavailable("Failed to calculate profit/loss") from e

        success_count = 0
        error_count = 0
        written = 0

        for pair_id in pair_ids:
            try:
                if self._recalculate_one(pair_id):
                    written += 1
                success_count += 1
            except Exception:
                logger.exception("Profit/loss recalculation failed for pair id=%s", pair_id)
                error_count += 1

        result = RecalculationResult(
            total_processed=len(pair_ids),
            success_count=success_count,
            error_count=error_count,
        )
        logger.info(
            "Profit/loss recalculation done: processed=%s success=%s errors=%s written=%s",
            result.total_processed, result.success_count, result.error_count, written,
        )
        return result

    def _recalculate_one(self, pair_id):
        with transaction.atomic():
            pair = Pair.objects.filter(pk=pair_id).first()
            if pair is None:
                # deleted since enumeration, nothing left to update
                return False

            if not pair.recalculate_profit_loss():
                return False

            pair.save(update_fields=[*Pair.PROFIT_LOSS_FIELDS, "updated_at"])
            return True


pair_service = PairService()
