"""webhook-inspector: seed and browse webhook deliveries for debugging."""

__version__ = "1.0.0"
