"""Synthesize Stripe-style webhook event payloads."""

from typing import Any, Callable, Optional

from .catalog import category_of
from .randomness import RandomSource

API_VERSION = "2023-10-16"
CURRENCY = "usd"

Body = dict[str, Any]


def _customer_id(rng: RandomSource) -> str:
    return f"cus_{rng.alphanumeric(14)}"


def _charge(event_type: str, rng: RandomSource) -> Body:
    return {
        "id": f"ch_{rng.alphanumeric(24)}",
        "object": "charge",
        "amount": rng.integer(1000, 100000),
        "currency": CURRENCY,
        "customer": _customer_id(rng),
        "description": rng.product_name(),
        "status": "succeeded" if event_type == "charge.succeeded" else "failed",
    }


def _payment_intent(event_type: str, rng: RandomSource) -> Body:
    if "succeeded" in event_type:
        status = "succeeded"
    elif "failed" in event_type:
        status = "failed"
    else:
        status = "created"
    return {
        "id": f"pi_{rng.alphanumeric(24)}",
        "object": "payment_intent",
        "amount": rng.integer(1000, 100000),
        "currency": CURRENCY,
        "customer": _customer_id(rng),
        "status": status,
    }


def _subscription(event_type: str, rng: RandomSource) -> Body:
    return {
        "id": f"sub_{rng.alphanumeric(14)}",
        "object": "subscription",
        "customer": _customer_id(rng),
        "status": "active",
        "plan": {
            "id": f"plan_{rng.alphanumeric(14)}",
            "amount": rng.integer(999, 9999),
            "currency": CURRENCY,
            "interval": rng.choice(["month", "year"]),
        },
    }


def _invoice(event_type: str, rng: RandomSource) -> Body:
    if event_type == "invoice.paid":
        status = "paid"
    elif event_type == "invoice.payment_failed":
        status = "open"
    else:
        status = "draft"
    return {
        "id": f"in_{rng.alphanumeric(24)}",
        "object": "invoice",
        "customer": _customer_id(rng),
        "amount_due": rng.integer(1000, 50000),
        "amount_paid": rng.integer(1000, 50000) if event_type == "invoice.paid" else 0,
        "currency": CURRENCY,
        "status": status,
    }


def _checkout_session(event_type: str, rng: RandomSource) -> Body:
    completed = event_type == "checkout.session.completed"
    return {
        "id": f"cs_{rng.alphanumeric(24)}",
        "object": "checkout.session",
        "customer": _customer_id(rng),
        "amount_total": rng.integer(1000, 100000),
        "currency": CURRENCY,
        "payment_status": "paid" if completed else "unpaid",
        "status": "complete" if completed else "expired",
    }


def _customer(event_type: str, rng: RandomSource) -> Body:
    customer_id = _customer_id(rng)
    name = rng.full_name()
    return {
        "id": customer_id,
        "object": "customer",
        "email": rng.email(name),
        "name": name,
        "phone": rng.phone_number(),
        "created": rng.past_date().timestamp(),
    }


def _payment_method(event_type: str, rng: RandomSource) -> Body:
    return {
        "id": f"pm_{rng.alphanumeric(24)}",
        "object": "payment_method",
        "type": "card",
        "customer": _customer_id(rng),
        "card": {
            "brand": rng.choice(["visa", "mastercard", "amex"]),
            "last4": rng.numeric(4),
            "exp_month": rng.integer(1, 12),
            "exp_year": rng.integer(2024, 2030),
        },
    }


BODY_BUILDERS: dict[str, Callable[[str, RandomSource], Body]] = {
    "charge.": _charge,
    "payment_intent.": _payment_intent,
    "customer.subscription.": _subscription,
    "invoice.": _invoice,
    "checkout.session.": _checkout_session,
    "customer.": _customer,
    "payment_method.": _payment_method,
}


def generate_payload(event_type: str, rng: Optional[RandomSource] = None) -> dict[str, Any]:
    """Build a Stripe event payload for event_type.

    Event types outside the known categories get the bare event envelope
    with no ``data`` key.
    """
    if rng is None:
        rng = RandomSource()

    event: dict[str, Any] = {
        "id": f"evt_{rng.alphanumeric(24)}",
        "object": "event",
        "api_version": API_VERSION,
        "created": rng.recent_date(days=30).timestamp(),
        "type": event_type,
        "livemode": rng.boolean(),
    }

    category = category_of(event_type)
    if category is not None:
        event["data"] = {"object": BODY_BUILDERS[category](event_type, rng)}

    return event
