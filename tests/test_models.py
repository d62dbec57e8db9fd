"""
Tests for ReceiptPayload / LineItem building and serialization.
"""
from datetime import datetime
import json

import pytest

from receipt_dispatch.core.models import DEFAULT_FOOTER, LineItem, ReceiptPayload


WHEN = datetime(2026, 3, 14, 15, 9, 26)


class TestLineItem:
    def test_create_computes_total(self):
        item = LineItem.create("Latte", 3, 4.5)
        assert item.total == pytest.approx(13.5)

    def test_from_dict_defaults(self):
        item = LineItem.from_dict({"name": "Tea"})
        assert item.quantity == 0
        assert item.total == 0.0


class TestReceiptBuild:
    def test_totals(self):
        p = ReceiptPayload.build(
            [LineItem.create("A", 2, 5.0), LineItem.create("B", 1, 2.5)],
            tax_rate=10,
            when=WHEN,
        )
        assert p.subtotal == pytest.approx(12.5)
        assert p.tax == pytest.approx(1.25)
        assert p.total == pytest.approx(p.subtotal + p.tax)

    def test_header_defaults(self):
        p = ReceiptPayload.build([], phone="555-0100", when=WHEN)
        assert p.title == "Receipt"
        assert p.phone == "Phone: 555-0100"
        assert p.footer == DEFAULT_FOOTER

    def test_empty_phone_has_no_prefix(self):
        assert ReceiptPayload.build([], when=WHEN).phone == ""

    def test_date_and_time_format(self):
        p = ReceiptPayload.build([], when=WHEN)
        assert p.date == "03/14/2026"
        assert p.time == "03:09:26 PM"


class TestReceiptJson:
    def test_wire_keys(self):
        p = ReceiptPayload.build([LineItem.create("A", 1, 1.0)], tax_rate=8.25, when=WHEN)
        data = json.loads(p.to_json())
        assert list(data) == [
            "title", "address", "phone", "items", "subtotal", "tax",
            "taxRate", "total", "footer", "date", "time",
        ]
        assert data["taxRate"] == 8.25
        assert data["items"][0] == {"name": "A", "quantity": 1, "price": 1.0, "total": 1.0}

    def test_compact_and_unicode_preserved(self):
        p = ReceiptPayload(title="O'Brien's Café")
        text = p.to_json()
        assert "O'Brien's Café" in text
        assert ": " not in text

    def test_from_json(self):
        p = ReceiptPayload.build([LineItem.create("Bagel", 2, 1.75)], tax_rate=5, title="Deli", when=WHEN)
        back = ReceiptPayload.from_json(p.to_json())
        assert back == p
