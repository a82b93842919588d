# apps/companies/serializers.py
from rest_framework import serializers

from .models import Company


class CompanySerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Company
        fields = ["id", "name", "createdAt", "updatedAt"]
        read_only_fields = ["id"]


class CompanyDetailSerializer(CompanySerializer):
    """Company together with every pair it owns."""

    pairs = serializers.SerializerMethodField()

    class Meta(CompanySerializer.Meta):
        fields = CompanySerializer.Meta.fields + ["pairs"]

    def get_pairs(self, obj):
        # imported here, pairs serializers import this module
        from apps.pairs.serializers import PairSerializer

        return PairSerializer(obj.pairs.order_by("id"), many=True).data
