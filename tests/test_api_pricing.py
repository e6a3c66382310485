"""
Tests for the HTTP endpoints.
"""
import pytest

import shopping_pricing.config as config_mod
from shopping_pricing.rate_limit import limiter


# ---- Tax rates ----


def test_list_tax_rates(client):
    resp = client.get("/tax-rates")
    assert resp.status_code == 200
    codes = [r["code"] for r in resp.json()]
    assert codes == ["exempt", "general", "selective", "services"]


def test_get_tax_rate(client):
    resp = client.get("/tax-rates/general")
    assert resp.status_code == 200
    assert resp.json() == {"code": "general", "name": "General", "rate": 7.0, "label": "7% - General"}


def test_get_unknown_tax_rate_returns_404(client):
    resp = client.get("/tax-rates/luxury")
    assert resp.status_code == 404


def test_category_default_rate(client):
    resp = client.get("/tax-rates/category/Cervezas")
    assert resp.status_code == 200
    assert resp.json()["code"] == "selective"


def test_versioned_prefix(client):
    resp = client.get("/api/v1/tax-rates/exempt")
    assert resp.status_code == 200
    assert resp.json()["rate"] == 0.0


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


# ---- Pricing ----


def test_tax_preview(client):
    resp = client.post("/pricing/tax-preview", json={
        "price": 10.0,
        "quantity": 2,
        "tax_rate_code": "general",
        "price_includes_tax": True,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["tax_amount"] == 1.31
    assert data["subtotal"] == 20.0
    assert data["base_price"] == pytest.approx(9.35, abs=0.005)
    assert data["display_base_price"] == 9.35


def test_line_item_fills_rate_from_catalog(client):
    resp = client.post("/pricing/line-item", json={
        "unit_price": 10.0,
        "quantity": 2,
        "tax_rate_code": "general",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["tax_rate"] == 7.0
    assert data["tax_amount"] == 1.31
    assert data["subtotal"] == 20.0
    assert data["promotion_result"] is None


def test_line_item_with_promotion(client):
    resp = client.post("/pricing/line-item", json={
        "unit_price": 2.0,
        "quantity": 7,
        "tax_rate_code": "general",
        "promotion": {"id": "3x5", "type": "multi_buy", "value": 5, "min_quantity": 3},
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["subtotal"] == 12.0
    assert data["discount_amount"] == 2.0
    assert data["promotion_result"]["is_applicable"] is True


@pytest.mark.parametrize("body", [
    {"unit_price": -1, "quantity": 1, "tax_rate_code": "general"},
    {"unit_price": 1, "quantity": 0, "tax_rate_code": "general"},
    {"unit_price": 1, "quantity": 1, "tax_rate_code": "luxury"},
    {"unit_price": 1, "quantity": 1, "tax_rate_code": "general", "tax_rate": -7},
])
def test_line_item_rejects_invalid_input(client, body):
    resp = client.post("/pricing/line-item", json=body)
    assert resp.status_code == 422


def test_session_summary(client):
    resp = client.post("/pricing/session-summary", json={
        "items": [
            {"unit_price": 10.0, "quantity": 2, "tax_rate_code": "general"},
            {"unit_price": 2.5, "quantity": 4, "tax_rate_code": "exempt"},
            {"unit_price": 11.0, "quantity": 1, "tax_rate_code": "selective"},
        ]
    })
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["items"]) == 3

    summary = data["summary"]
    assert summary["subtotal_before_tax"] == 38.69
    assert summary["total_tax"] == 2.31
    assert summary["grand_total"] == 41.0
    assert set(summary["breakdown"]) == {"0", "7", "10"}
    assert summary["breakdown"]["7"]["item_count"] == 1


def test_empty_session_summary(client):
    resp = client.post("/pricing/session-summary", json={"items": []})
    assert resp.status_code == 200
    assert resp.json()["summary"] == {
        "subtotal_before_tax": 0.0,
        "total_tax": 0.0,
        "grand_total": 0.0,
        "breakdown": {},
    }


def test_session_summary_item_limit(client, monkeypatch):
    import shopping_pricing.schemas.pricing as pricing_schemas
    monkeypatch.setattr(pricing_schemas, "MAX_LINE_ITEMS", 2)

    item = {"unit_price": 1.0, "quantity": 1, "tax_rate_code": "general"}
    resp = client.post("/pricing/session-summary", json={"items": [item] * 3})
    assert resp.status_code == 422


# ---- Promotions ----


def test_calculate_promotion_without_coupon(client):
    resp = client.post("/promotions/calculate", json={
        "promotion": {"id": "p1", "type": "percent_off", "value": 20, "requires_coupon": "SAVE20"},
        "unit_price": 10.0,
        "quantity": 2,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_applicable"] is False
    assert "coupon" in data["not_applicable_reason"].lower()
    assert data["final_price"] == data["original_price"] == 20.0


def test_calculate_promotion_with_coupon(client):
    resp = client.post("/promotions/calculate", json={
        "promotion": {"id": "p1", "type": "percent_off", "value": 20, "requires_coupon": "SAVE20"},
        "unit_price": 10.0,
        "quantity": 2,
        "context": {"coupon_code": "SAVE20"},
    })
    assert resp.status_code == 200
    assert resp.json()["final_price"] == 16.0


@pytest.mark.parametrize("promotion", [
    {"id": "p", "type": "percent_off", "value": 150},
    {"id": "p", "type": "multi_buy", "value": 5},
    {"id": "p", "type": "fixed_off", "value": -1},
    {"id": "p", "type": "buy_one_get_two", "value": 1},
])
def test_calculate_promotion_rejects_invalid_definitions(client, promotion):
    resp = client.post("/promotions/calculate", json={
        "promotion": promotion,
        "unit_price": 1.0,
        "quantity": 1,
    })
    assert resp.status_code == 422


def test_evaluate_promotions_ranks_candidates(client):
    resp = client.post("/promotions/evaluate", json={
        "promotions": [
            {"id": "small", "type": "fixed_off", "value": 0.5, "status": "verified"},
            {"id": "expired", "type": "percent_off", "value": 50, "status": "verified",
             "end_date": "2026-01-31"},
            {"id": "big", "type": "percent_off", "value": 25, "status": "verified"},
            {"id": "coupon", "type": "percent_off", "value": 40, "requires_coupon": "X"},
        ],
        "unit_price": 4.0,
        "quantity": 1,
        "today": "2026-03-15",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert [e["promotion_id"] for e in data] == ["big", "small", "coupon"]
    assert data[0]["description"] == "25% off"
    assert data[0]["result"]["discount_amount"] == 1.0
    assert data[2]["result"]["is_applicable"] is False


# ---- Rate limiting ----


def test_rate_limit_returns_429_when_exceeded(client, monkeypatch):
    """Test that rate limiting returns 429 when limit is exceeded."""
    monkeypatch.setattr(config_mod, "RATE_LIMIT_PRICING", "2 per minute")

    limiter.enabled = True
    limiter.reset()

    body = {"unit_price": 1.0, "quantity": 1, "tax_rate_code": "general"}
    try:
        assert client.post("/pricing/line-item", json=body).status_code == 200
        assert client.post("/pricing/line-item", json=body).status_code == 200
        assert client.post("/pricing/line-item", json=body).status_code == 429
    finally:
        limiter.enabled = False
        limiter.reset()


def test_rate_limit_can_be_disabled(client, monkeypatch):
    monkeypatch.setattr(config_mod, "RATE_LIMIT_PRICING", "1 per minute")
    limiter.enabled = False

    body = {"unit_price": 1.0, "quantity": 1, "tax_rate_code": "general"}
    for _ in range(3):
        assert client.post("/pricing/line-item", json=body).status_code == 200
