# ===== apps/analytics/views.py =====
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

import logging

from apps.pairs.exceptions import PairServiceError
from apps.pairs.models import Pair
from apps.pairs.services import pair_service

from .aggregation import group_duplicate_pairs
from .serializers import DuplicatePairReportSerializer, RecalculationResultSerializer

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def get_duplicate_pairs(request):
    """Pairs grouped by their (buy, sell) stock codes, with P/L totals"""
    try:
        pairs = Pair.objects.with_company().with_stock_codes().order_by('id')
        report = group_duplicate_pairs(pairs)
        return Response(DuplicatePairReportSerializer(report).data)
    except Exception:
        logger.exception("get_duplicate_pairs failed")
        return Response(
            {'error': 'Failed to fetch duplicate pairs'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


@api_view(['POST'])
@permission_classes([AllowAny])
def calculate_profit_loss(request):
    """Recalculate and save P/L of every settled pair"""
    try:
        result = pair_service.recalculate_all_profit_loss()
        return Response(RecalculationResultSerializer(result).data)
    except PairServiceError as e:
        return Response(e.as_payload(), status=e.status_code)
    except Exception:
        logger.exception("calculate_profit_loss failed")
        return Response(
            {'error': 'Failed to calculate profit/loss'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
