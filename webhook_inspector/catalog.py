"""Stripe event types used for fixture data."""

from typing import Optional

STRIPE_EVENTS = [
    "charge.succeeded",
    "charge.failed",
    "charge.refunded",
    "payment_intent.succeeded",
    "payment_intent.payment_failed",
    "payment_intent.created",
    "customer.created",
    "customer.updated",
    "customer.deleted",
    "customer.subscription.created",
    "customer.subscription.updated",
    "customer.subscription.deleted",
    "invoice.created",
    "invoice.finalized",
    "invoice.paid",
    "invoice.payment_failed",
    "checkout.session.completed",
    "checkout.session.expired",
    "payment_method.attached",
    "payment_method.detached",
]

# Dispatch order: "customer.subscription." must come before "customer."
CATEGORY_PREFIXES = (
    "charge.",
    "payment_intent.",
    "customer.subscription.",
    "invoice.",
    "checkout.session.",
    "customer.",
    "payment_method.",
)


def category_of(event_type: str) -> Optional[str]:
    """Return the first category prefix matching event_type, or None."""
    for prefix in CATEGORY_PREFIXES:
        if event_type.startswith(prefix):
            return prefix
    return None
