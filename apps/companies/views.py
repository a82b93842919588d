# ===== apps/companies/views.py =====

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

import logging

from .models import Company
from .serializers import CompanySerializer, CompanyDetailSerializer

logger = logging.getLogger(__name__)


@api_view(["GET", "POST"])
@permission_classes([AllowAny])
def company_collection(request):
    """List companies or create a new one"""
    if request.method == "GET":
        companies = Company.objects.all()
        return Response(CompanySerializer(companies, many=True).data)

    serializer = CompanySerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {"error": "Company name is required", "details": serializer.errors},
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        company = serializer.save()
    except Exception:
        logger.exception("create_company failed")
        return Response(
            {"error": "Failed to create company"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.info("Created company id=%s", company.pk)
    return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([AllowAny])
def company_detail(request, pk):
    if not pk.isdigit():
        return Response({"error": "Invalid company id"}, status=status.HTTP_400_BAD_REQUEST)

    company = Company.objects.filter(pk=int(pk)).first()
    if company is None:
        return Response({"error": "Company not found"}, status=status.HTTP_404_NOT_FOUND)

    return Response(CompanyDetailSerializer(company).data)
