"""
Tests for Pydantic models and money helpers
"""

import re
import pytest
from decimal import Decimal

from marketplace.models import Order, Product, Session, User, new_id
from marketplace.services.money import format_money, round_money, to_decimal, to_float


class TestIds:
    """Tests for generated ids."""

    def test_format(self):
        assert re.fullmatch(r"prod_[a-z0-9]{8}", new_id("prod"))

    def test_unique(self):
        assert len({new_id("ord") for _ in range(200)}) == 200

    def test_default_prefixes(self):
        assert User(name="n", email="e", password_hash="h").id.startswith("user_")
        assert Product(title="t", price=1).id.startswith("prod_")
        assert Order().id.startswith("ord_")


class TestRecords:
    """Tests for persisted record shapes."""

    def test_product_json_roundtrip_keeps_numeric_price(self):
        product = Product(title="X", price="9.99")
        data = product.model_dump(mode="json")

        assert data["price"] == 9.99
        assert Product.model_validate(data) == product

    def test_unknown_stored_fields_ignored(self):
        session = Session.model_validate({"user_id": "user_1", "since": "2025-01-01T00:00:00Z", "legacy": 1})

        assert session.user_id == "user_1"
        assert session.since.year == 2025

    def test_created_at_is_utc(self):
        user = User(name="n", email="e", password_hash="h")
        assert user.created_at.tzinfo is not None


class TestMoney:
    """Tests for money helpers."""

    def test_to_decimal(self):
        assert to_decimal("9.99") == Decimal("9.99")
        assert to_decimal(9.99) == Decimal("9.99")
        assert to_decimal(None) == Decimal("0")
        assert to_decimal("abc") == Decimal("0")

    def test_round_money(self):
        assert round_money("2.005") == Decimal("2.01")

    def test_to_float(self):
        assert to_float(Decimal("24.48")) == 24.48

    @pytest.mark.parametrize(
        "value, currency, expected",
        [
            (9.99, "USD", "$9.99"),
            ("14", "USD", "$14.00"),
            (4.5, "EUR", "€4.50"),
            (3, "JPY", "3.00 JPY"),
        ],
    )
    def test_format_money(self, value, currency, expected):
        assert format_money(value, currency) == expected
