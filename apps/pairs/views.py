# ===== apps/pairs/views.py =====

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

import logging

from .exceptions import PairServiceError
from .serializers import PairSerializer
from .services import pair_service

logger = logging.getLogger(__name__)


def error_response(exc: PairServiceError):
    return Response(exc.as_payload(), status=exc.status_code)


def server_error(message):
    return Response({"error": message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


# ============================================================
# COLLECTION
# ============================================================

@api_view(["GET", "POST"])
@permission_classes([AllowAny])
def pair_collection(request):
    if request.method == "GET":
        try:
            pairs = pair_service.list_pairs(request.query_params.get("companyId"))
            return Response(PairSerializer(pairs, many=True).data)
        except PairServiceError as e:
            return error_response(e)
        except Exception:
            logger.exception("list_pairs failed")
            return server_error("Failed to fetch pairs")

    try:
        pair = pair_service.create_pair(request.data)
        return Response(PairSerializer(pair).data, status=status.HTTP_201_CREATED)
    except PairServiceError as e:
        return error_response(e)
    except Exception:
        logger.exception("create_pair failed")
        return server_error("Failed to create pair")


# ============================================================
# SINGLE PAIR
# ============================================================

@api_view(["GET", "PUT", "DELETE"])
@permission_classes([AllowAny])
def pair_detail(request, pk):
    if request.method == "GET":
        try:
            pair = pair_service.get_pair(pk)
            return Response(PairSerializer(pair).data)
        except PairServiceError as e:
            return error_response(e)
        except Exception:
            logger.exception("get_pair failed for id=%s", pk)
            return server_error("Failed to fetch pair")

    if request.method == "PUT":
        try:
            pair = pair_service.update_pair(pk, request.data)
            return Response(PairSerializer(pair).data)
        except PairServiceError as e:
            return error_response(e)
        except Exception:
            logger.exception("update_pair failed for id=%s", pk)
            return server_error("Failed to update pair")

    try:
        pair_service.delete_pair(pk)
        return Response({"success": True})
    except PairServiceError as e:
        return error_response(e)
    except Exception:
        logger.exception("delete_pair failed for id=%s", pk)
        return server_error("Failed to delete pair")


@api_view(["POST"])
@permission_classes([AllowAny])
def settle_pair(request, pk):
    try:
        pair = pair_service.set_settled(pk, request.data)
        return Response(PairSerializer(pair).data)
    except PairServiceError as e:
        return error_response(e)
    except Exception:
        logger.exception("settle_pair failed for id=%s", pk)
        return server_error("Failed to update settlement")
