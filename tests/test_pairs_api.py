from decimal import Decimal

import pytest
from django.db import DatabaseError

from apps.companies.models import Company
from apps.pairs.models import Pair
from apps.pairs.services import pair_service


pytestmark = pytest.mark.django_db


def url(pk):
    return f"/api/pairs/{pk}"


# ============================================================
# GET
# ============================================================

def test_get_returns_pair_with_company(api_client, make_pair, company):
    pair = make_pair(link="https://example.com/note", analysis_record="mean reversion")

    response = api_client.get(url(pair.pk))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == pair.pk
    assert data["name"] == "Toyota / SoftBank"
    assert data["buyStockCode"] == "7203"
    assert data["sellStockCode"] == "9984"
    assert data["buyShares"] == 100
    assert data["buyPrice"] == 1000
    assert data["profitLoss"] is None
    assert data["isSettled"] is False
    assert data["companyId"] == company.pk
    assert data["company"]["name"] == "Toyota Research"


@pytest.mark.parametrize("bad_id", ["abc", "-1", "1.5"])
def test_get_rejects_invalid_id(api_client, bad_id):
    response = api_client.get(url(bad_id))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid pair id"}


def test_get_missing_pair(api_client):
    response = api_client.get(url(999))

    assert response.status_code == 404
    assert response.json() == {"error": "Pair not found"}


def test_get_hides_storage_errors(api_client, make_pair, monkeypatch):
    pair = make_pair()

    def boom(self, raw_id):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr("apps.pairs.services.PairService.get_pair", boom)
    response = api_client.get(url(pair.pk))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch pair"}
    assert "connection" not in response.content.decode()


# ============================================================
# PUT
# ============================================================

def test_update_settled_pair_recomputes_profit_loss(api_client, make_pair, update_body):
    pair = make_pair(is_settled=True)

    response = api_client.put(
        url(pair.pk),
        update_body(currentBuyPrice="1100", currentSellPrice="1900"),
        format="json",
    )

    assert response.status_code == 200
    data = response.json()
    assert data["buyProfitLoss"] == 10000
    assert data["sellProfitLoss"] == 10000
    assert data["profitLoss"] == 20000

    pair.refresh_from_db()
    assert pair.buy_profit_loss == Decimal("10000")
    assert pair.sell_profit_loss == Decimal("10000")
    assert pair.profit_loss == Decimal("20000")


def test_update_unsettled_pair_keeps_profit_loss(api_client, make_pair, update_body):
    pair = make_pair(
        is_settled=False,
        buy_profit_loss=Decimal("1"),
        sell_profit_loss=Decimal("2"),
        profit_loss=Decimal("3"),
    )

    response = api_client.put(
        url(pair.pk),
        update_body(currentBuyPrice="1500", currentSellPrice="1500"),
        format="json",
    )

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.profit_loss == Decimal("3")
    assert pair.buy_profit_loss == Decimal("1")
    assert pair.sell_profit_loss == Decimal("2")
    assert pair.current_buy_price == Decimal("1500")


def test_update_reuses_stored_current_prices(api_client, make_pair, update_body):
    pair = make_pair(
        is_settled=True,
        current_buy_price=Decimal("1100"),
        current_sell_price=Decimal("1900"),
    )

    body = update_body(buyPrice="1050", currentBuyPrice="", currentSellPrice=None)
    response = api_client.put(url(pair.pk), body, format="json")

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.current_buy_price == Decimal("1100")
    assert pair.current_sell_price == Decimal("1900")
    # (1100 - 1050) * 100 + (2000 - 1900) * 100
    assert pair.profit_loss == Decimal("15000")


def test_update_settled_pair_with_one_price_missing_keeps_profit_loss(api_client, make_pair, update_body):
    pair = make_pair(is_settled=True, profit_loss=Decimal("42"))

    response = api_client.put(url(pair.pk), update_body(currentBuyPrice="1100"), format="json")

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.current_buy_price == Decimal("1100")
    assert pair.current_sell_price is None
    assert pair.profit_loss == Decimal("42")


def test_update_replaces_all_fields_and_blanks_become_null(api_client, make_pair, update_body):
    pair = make_pair(link="https://old.example.com", analysis_record="old notes")

    body = update_body(
        name="Renamed",
        link="",
        buyStockCode="  ",
        sellStockCode="6758",
        buyShares="300",
        sellPrice="2100.25",
    )
    body.pop("analysisRecord", None)
    response = api_client.put(url(pair.pk), body, format="json")

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.name == "Renamed"
    assert pair.link is None
    assert pair.analysis_record is None
    assert pair.buy_stock_code is None
    assert pair.sell_stock_code == "6758"
    assert pair.buy_shares == 300
    assert pair.sell_price == Decimal("2100.25")


@pytest.mark.parametrize("name", ["", None, "   "])
def test_update_requires_name(api_client, make_pair, update_body, name):
    pair = make_pair()

    response = api_client.put(url(pair.pk), update_body(name=name), format="json")

    assert response.status_code == 400
    assert response.json()["error"] == "Pair name is required"
    pair.refresh_from_db()
    assert pair.name == "Toyota / SoftBank"


def test_update_without_name_key(api_client, make_pair, update_body):
    pair = make_pair()
    body = update_body()
    del body["name"]

    response = api_client.put(url(pair.pk), body, format="json")

    assert response.status_code == 400
    assert response.json()["error"] == "Pair name is required"


@pytest.mark.parametrize("field", ["buyShares", "sellShares", "buyPrice", "sellPrice"])
def test_update_rejects_non_numeric_fields(api_client, make_pair, update_body, field):
    pair = make_pair()

    response = api_client.put(url(pair.pk), update_body(**{field: "lots"}), format="json")

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Shares and prices must be numeric"
    assert field in data["details"]


def test_update_rejects_non_numeric_current_price(api_client, make_pair, update_body):
    pair = make_pair()

    response = api_client.put(url(pair.pk), update_body(currentBuyPrice="soon"), format="json")

    assert response.status_code == 400
    assert response.json()["error"] == "Current prices must be numeric"


def test_update_invalid_id(api_client, update_body):
    response = api_client.put(url("x1"), update_body(), format="json")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid pair id"}


def test_update_missing_pair(api_client, update_body):
    response = api_client.put(url(12345), update_body(), format="json")

    assert response.status_code == 404


def test_update_missing_pair_is_reported_before_body_errors(api_client, db):
    response = api_client.put(url(12345), {"name": ""}, format="json")

    assert response.status_code == 404
    assert response.json() == {"error": "Pair not found"}


def test_update_accepts_prices_beyond_four_decimals(api_client, make_pair, update_body):
    pair = make_pair(is_settled=True)

    response = api_client.put(
        url(pair.pk),
        update_body(buyPrice="1000.12345", currentBuyPrice="1100.123456789", currentSellPrice="1900"),
        format="json",
    )

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.buy_price == Decimal("1000.12345")
    # rounded half-up to the stored scale
    assert pair.current_buy_price == Decimal("1100.12345679")
    # (1100.12345679 - 1000.12345) * 100 + (2000 - 1900) * 100
    assert pair.buy_profit_loss == Decimal("10000.000679")
    assert pair.profit_loss == Decimal("20000.000679")


def test_update_with_largest_shares_and_prices_saves(make_pair, update_body):
    pair = make_pair(is_settled=True)
    big_price = "9" * 20

    updated = pair_service.update_pair(
        pair.pk,
        update_body(
            buyShares=2147483647,
            sellShares=2147483647,
            buyPrice="0",
            sellPrice=big_price,
            currentBuyPrice=big_price,
            currentSellPrice="0",
        ),
    )

    expected = int(big_price) * 2147483647
    assert updated.buy_profit_loss == Decimal(expected)
    assert updated.profit_loss == Decimal(expected * 2)
    assert Pair.objects.filter(pk=pair.pk, profit_loss__isnull=False).exists()


@pytest.mark.parametrize("field, value", [("buyShares", 2147483648), ("sellPrice", "1" + "0" * 20)])
def test_update_rejects_out_of_range_numbers(api_client, make_pair, update_body, field, value):
    pair = make_pair()

    response = api_client.put(url(pair.pk), update_body(**{field: value}), format="json")

    assert response.status_code == 400
    assert response.json()["error"] == "Shares and prices are out of range"


def test_update_hides_storage_errors(api_client, make_pair, update_body, monkeypatch):
    pair = make_pair()

    def broken_save(self, *args, **kwargs):
        raise DatabaseError("disk I/O error on /var/lib/pairs.db")

    monkeypatch.setattr(Pair, "save", broken_save)
    response = api_client.put(url(pair.pk), update_body(name="Renamed"), format="json")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update pair"}
    assert "disk" not in response.content.decode()

    monkeypatch.undo()
    pair.refresh_from_db()
    assert pair.name == "Toyota / SoftBank"


def test_update_keeps_id(api_client, make_pair, update_body):
    pair = make_pair()

    response = api_client.put(url(pair.pk), update_body(id=pair.pk + 100), format="json")

    assert response.status_code == 200
    assert response.json()["id"] == pair.pk
    assert not Pair.objects.filter(pk=pair.pk + 100).exists()


# ============================================================
# DELETE
# ============================================================

def test_delete_then_get_is_not_found(api_client, make_pair):
    pair = make_pair()

    response = api_client.delete(url(pair.pk))
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert api_client.get(url(pair.pk)).status_code == 404
    assert api_client.delete(url(pair.pk)).status_code == 404


def test_delete_invalid_id(api_client):
    response = api_client.delete(url("one"))

    assert response.status_code == 400


def test_delete_only_removes_that_pair(api_client, make_pair, company):
    first = make_pair()
    second = make_pair(name="Other")

    api_client.delete(url(first.pk))

    assert list(Pair.objects.values_list("pk", flat=True)) == [second.pk]
    assert Company.objects.filter(pk=company.pk).exists()


# ============================================================
# COLLECTION / SETTLEMENT
# ============================================================

def test_create_pair(api_client, company, update_body):
    body = update_body(
        companyId=company.pk,
        isSettled=True,
        currentBuyPrice="1100",
        currentSellPrice="1900",
    )

    response = api_client.post("/api/pairs/", body, format="json")

    assert response.status_code == 201
    data = response.json()
    assert data["companyId"] == company.pk
    assert data["isSettled"] is True
    assert data["profitLoss"] == 20000
    assert Pair.objects.get(pk=data["id"]).profit_loss == Decimal("20000")


def test_create_pair_needs_existing_company(api_client, db, update_body):
    response = api_client.post("/api/pairs/", update_body(companyId=404), format="json")

    assert response.status_code == 400
    assert response.json()["error"] == "A valid companyId is required"
    assert not Pair.objects.exists()


def test_list_pairs_filters_by_company(api_client, make_pair, company):
    from apps.companies.models import Company

    other = Company.objects.create(name="Other Co")
    mine = make_pair()
    make_pair(company=other)

    response = api_client.get("/api/pairs/", {"companyId": company.pk})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [mine.pk]
    assert len(api_client.get("/api/pairs/").json()) == 2
    assert api_client.get("/api/pairs/", {"companyId": "abc"}).status_code == 400


def test_settle_computes_profit_loss(api_client, make_pair):
    pair = make_pair(current_buy_price=Decimal("1100"), current_sell_price=Decimal("1900"))

    response = api_client.post(f"/api/pairs/{pair.pk}/settle", {"isSettled": True}, format="json")

    assert response.status_code == 200
    assert response.json()["profitLoss"] == 20000
    pair.refresh_from_db()
    assert pair.is_settled is True
    assert pair.profit_loss == Decimal("20000")


def test_unsettle_keeps_profit_loss(api_client, make_pair):
    pair = make_pair(is_settled=True, profit_loss=Decimal("9"))

    response = api_client.post(f"/api/pairs/{pair.pk}/settle", {"isSettled": False}, format="json")

    assert response.status_code == 200
    pair.refresh_from_db()
    assert pair.is_settled is False
    assert pair.profit_loss == Decimal("9")


def test_delete_hides_storage_errors(api_client, make_pair, monkeypatch):
    pair = make_pair()

    def broken_delete(self):
        raise DatabaseError("database is locked: pairs")

    monkeypatch.setattr("apps.pairs.models.PairQuerySet.delete", broken_delete, raising=False)
    response = api_client.delete(url(pair.pk))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to delete pair"}
    assert "locked" not in response.content.decode()

    monkeypatch.undo()
    assert Pair.objects.filter(pk=pair.pk).exists()
