"""Client payment history.

There is no payments ledger: the history shown in the client dashboard is
derived from the caller's orders.

- every paid order (status other than PENDING, total > 0) yields the initial
  payment for the website, with an invoice unless it was cancelled
- a live site (COMPLETED with the setup finished) also yields up to three
  monthly hosting payments since completion and the pending payment due on
  the first day of next month

Invoice amounts include 21 % VAT; `subtotal + tax == amount`.
"""

import calendar
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.utils import timezone

from .models import Order

Status = Order.Status

CURRENCY = "EUR"
VAT_RATE = Decimal("0.21")
HOSTING_FEE = Decimal("49.00")
HOSTING_ITEMS = (
    ("Hosting Premium + SSL", "hosting", Decimal("25.00")),
    ("Mantenimiento técnico", "maintenance", Decimal("15.83")),
)
MAX_HOSTING_PAYMENTS = 3
BILLING_MONTH = timedelta(days=30)
INVOICE_DUE_DAYS = 15
HOSTING_DUE_DAYS = 5

_CENT = Decimal("0.01")


def add_months(value, months: int):
    """Same day `months` later, clamped to the last day of the month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def split_vat(amount) -> tuple:
    """(subtotal, tax) of a VAT-inclusive amount."""
    amount = Decimal(amount)
    subtotal = (amount / (1 + VAT_RATE)).quantize(_CENT, rounding=ROUND_HALF_UP)
    return subtotal, amount - subtotal


def _iso(value):
    return value.isoformat() if value is not None else None


def _invoice(invoice_id, number, payment_id, amount, issued_at, due_at, paid_at, items, status, download_url):
    subtotal, tax = split_vat(amount)
    return {
        "id": invoice_id,
        "number": number,
        "paymentId": payment_id,
        "amount": float(amount),
        "subtotal": float(subtotal),
        "tax": float(tax),
        "currency": CURRENCY,
        "status": status,
        "issuedAt": _iso(issued_at),
        "dueAt": _iso(due_at),
        "paidAt": _iso(paid_at),
        "items": items,
        "downloadUrl": download_url,
    }


def _hosting_items():
    return [
        {
            "id": str(index),
            "description": description,
            "quantity": 1,
            "unitPrice": float(price),
            "total": float(price),
            "category": category,
        }
        for index, (description, category, price) in enumerate(HOSTING_ITEMS, start=1)
    ]


def _initial_payment(order: Order) -> dict:
    short = str(order.id)[-3:]
    payment_id = f"PAY-{order.id}-1"
    cancelled = order.status == Status.CANCELLED
    if cancelled:
        payment_status = "cancelled"
    elif order.status == Status.REFUNDED:
        payment_status = "refunded"
    else:
        payment_status = "completed"
    paid_at = None if cancelled else order.created_at
    template_name = order.template.name if order.template_id else "Plan personalizado"

    invoice = None
    if not cancelled:
        subtotal, _ = split_vat(order.total)
        invoice = _invoice(
            invoice_id=f"INV-{order.id}-1",
            number=f"FAC-{order.created_at.year}-{short}",
            payment_id=payment_id,
            amount=order.total,
            issued_at=order.created_at,
            due_at=order.created_at + timedelta(days=INVOICE_DUE_DAYS),
            paid_at=order.created_at,
            items=[
                {
                    "id": "1",
                    "description": "Desarrollo web personalizado",
                    "quantity": 1,
                    "unitPrice": float(subtotal),
                    "total": float(subtotal),
                    "category": "development",
                }
            ],
            status="paid",
            download_url=f"/api/invoices/{order.id}-1.pdf",
        )

    return {
        "id": payment_id,
        "orderId": str(order.id),
        "amount": float(order.total),
        "currency": CURRENCY,
        "status": payment_status,
        "method": "card",
        "stripePaymentId": order.stripe_session_id or None,
        "description": f"Desarrollo web completo - {template_name}",
        "paidAt": paid_at,
        "invoice": invoice,
    }


def _hosting_payments(order: Order, now) -> list:
    short = str(order.id)[-3:]
    out = []
    months_live = int((now - order.completed_at) / BILLING_MONTH)
    for index in range(1, min(months_live, MAX_HOSTING_PAYMENTS) + 1):
        paid_at = add_months(order.completed_at, index)
        payment_id = f"PAY-{order.id}-hosting-{index}"
        out.append(
            {
                "id": payment_id,
                "orderId": str(order.id),
                "amount": float(HOSTING_FEE),
                "currency": CURRENCY,
                "status": "completed",
                "method": "card",
                "stripePaymentId": None,
                "description": "Hosting y mantenimiento mensual",
                "paidAt": paid_at,
                "invoice": _invoice(
                    invoice_id=f"INV-{order.id}-hosting-{index}",
                    number=f"FAC-{paid_at.year}-H{short}-{index}",
                    payment_id=payment_id,
                    amount=HOSTING_FEE,
                    issued_at=paid_at,
                    due_at=paid_at + timedelta(days=HOSTING_DUE_DAYS),
                    paid_at=paid_at,
                    items=_hosting_items(),
                    status="paid",
                    download_url=f"/api/invoices/{order.id}-hosting-{index}.pdf",
                ),
            }
        )

    local_now = timezone.localtime(now)
    due = add_months(local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0), 1)
    payment_id = f"PAY-{order.id}-next"
    out.append(
        {
            "id": payment_id,
            "orderId": str(order.id),
            "amount": float(HOSTING_FEE),
            "currency": CURRENCY,
            "status": "pending",
            "method": "card",
            "stripePaymentId": None,
            "description": "Hosting y mantenimiento mensual - Próximo pago",
            "paidAt": None,
            "invoice": _invoice(
                invoice_id=f"INV-{order.id}-next",
                number=f"FAC-{due.year}-NEXT-{short}",
                payment_id=payment_id,
                amount=HOSTING_FEE,
                issued_at=now,
                due_at=due,
                paid_at=None,
                items=_hosting_items(),
                status="sent",
                download_url=None,
            ),
        }
    )
    return out


def payment_history(orders, now=None) -> list:
    """Payments derived from `orders`, newest first; unpaid entries lead."""
    now = now or timezone.now()
    payments = []
    for order in orders:
        if order.status != Status.PENDING and order.total > 0:
            payments.append(_initial_payment(order))
        if order.status == Status.COMPLETED and order.setup_completed and order.completed_at:
            payments.extend(_hosting_payments(order, now))

    payments.sort(key=lambda p: p["paidAt"] or now, reverse=True)
    for payment in payments:
        payment["paidAt"] = _iso(payment["paidAt"])
    return payments
