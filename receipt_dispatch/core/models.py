from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Any, Dict, Iterable, Optional

import json


DEFAULT_FOOTER = "Thank you for your purchase!"


# ---------- Line items ----------

@dataclass
class LineItem:
    name: str
    quantity: int = 1
    price: float = 0.0              # unit price
    total: float = 0.0              # quantity * price, caller-computed

    @staticmethod
    def create(name: str, quantity: int, price: float) -> "LineItem":
        return LineItem(
            name=name,
            quantity=int(quantity),
            price=float(price),
            total=round(int(quantity) * float(price), 2),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "total": self.total,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LineItem":
        return LineItem(
            name=d.get("name", ""),
            quantity=int(d.get("quantity", 0)),
            price=float(d.get("price", 0.0)),
            total=float(d.get("total", 0.0)),
        )


# ---------- Receipt ----------

@dataclass
class ReceiptPayload:
    """
    Everything the external print program needs to lay out a receipt.

    The dispatcher never looks inside this; it only sees the JSON text
    produced by :meth:`to_json`. ``total == subtotal + tax`` is the caller's
    rule and is not enforced here.
    """
    title: str = "Receipt"
    address: str = ""
    phone: str = ""
    items: List[LineItem] = field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    tax_rate: float = 0.0           # percent; serialized as "taxRate"
    total: float = 0.0
    footer: str = DEFAULT_FOOTER
    date: str = ""
    time: str = ""

    @classmethod
    def build(
        cls,
        items: Iterable[LineItem],
        tax_rate: float = 0.0,
        *,
        title: str = "Receipt",
        address: str = "",
        phone: str = "",
        footer: str = "",
        when: Optional[datetime] = None,
    ) -> "ReceiptPayload":
        """
        Assemble a payload and compute its money fields.

        ``tax_rate`` is a percentage. A non-empty *phone* gets a ``"Phone: "``
        prefix and an empty *footer* falls back to the default thank-you line.
        """
        items = list(items)
        subtotal = round(sum(i.total for i in items), 2)
        tax = round(subtotal * float(tax_rate) / 100.0, 2)
        when = when or datetime.now()
        return cls(
            title=title or "Receipt",
            address=address,
            phone=f"Phone: {phone}" if phone else "",
            items=items,
            subtotal=subtotal,
            tax=tax,
            tax_rate=float(tax_rate),
            total=round(subtotal + tax, 2),
            footer=footer or DEFAULT_FOOTER,
            date=when.strftime("%m/%d/%Y"),
            time=when.strftime("%I:%M:%S %p"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "address": self.address,
            "phone": self.phone,
            "items": [i.to_dict() for i in self.items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "taxRate": self.tax_rate,
            "total": self.total,
            "footer": self.footer,
            "date": self.date,
            "time": self.time,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ReceiptPayload":
        return ReceiptPayload(
            title=d.get("title", "Receipt"),
            address=d.get("address", ""),
            phone=d.get("phone", ""),
            items=[LineItem.from_dict(x) for x in d.get("items", [])],
            subtotal=float(d.get("subtotal", 0.0)),
            tax=float(d.get("tax", 0.0)),
            tax_rate=float(d.get("taxRate", 0.0)),
            total=float(d.get("total", 0.0)),
            footer=d.get("footer", DEFAULT_FOOTER),
            date=d.get("date", ""),
            time=d.get("time", ""),
        )

    # ---- wire form ----
    def to_json(self) -> str:
        # compact, non-ASCII kept as-is (store names, currency symbols)
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @staticmethod
    def from_json(text: str) -> "ReceiptPayload":
        return ReceiptPayload.from_dict(json.loads(text))
