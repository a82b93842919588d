from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from apps.companies.models import Company
from apps.pairs.models import Pair


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def company(db) -> Company:
    return Company.objects.create(name="Toyota Research")


@pytest.fixture
def make_pair(company):
    def _make(**overrides) -> Pair:
        values = {
            "company": company,
            "name": "Toyota / SoftBank",
            "buy_shares": 100,
            "sell_shares": 100,
            "buy_price": Decimal("1000"),
            "sell_price": Decimal("2000"),
            "buy_stock_code": "7203",
            "sell_stock_code": "9984",
        }
        values.update(overrides)
        return Pair.objects.create(**values)

    return _make


@pytest.fixture
def update_body():
    def _body(**overrides) -> dict:
        body = {
            "name": "Toyota / SoftBank",
            "buyShares": 100,
            "sellShares": 100,
            "buyPrice": "1000",
            "sellPrice": "2000",
            "buyStockCode": "7203",
            "sellStockCode": "9984",
        }
        body.update(overrides)
        return body

    return _body
