# ===== apps/analytics/serializers.py =====
from rest_framework import serializers

from apps.pairs.serializers import PairSerializer


def _amount_field(**kwargs):
    return serializers.DecimalField(max_digits=60, decimal_places=8, read_only=True, **kwargs)


class DuplicatePairGroupSerializer(serializers.Serializer):
    stockCodes = serializers.DictField(source="stock_codes", read_only=True)
    pairs = PairSerializer(many=True, read_only=True)
    totalProfitLoss = _amount_field(source="total_profit_loss")


class DuplicatePairReportSerializer(serializers.Serializer):
    duplicatePairGroups = DuplicatePairGroupSerializer(source="groups", many=True, read_only=True)
    uniquePairs = PairSerializer(source="unique_pairs", many=True, read_only=True)
    totalProfitLoss = _amount_field(source="total_profit_loss")


class RecalculationResultSerializer(serializers.Serializer):
    totalProcessed = serializers.IntegerField(source="total_processed")
    successCount = serializers.IntegerField(source="success_count")
    errorCount = serializers.IntegerField(source="error_count")
