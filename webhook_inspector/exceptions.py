"""Exceptions raised by webhook-inspector."""


class WebhookInspectorError(Exception):
    """Base error for the package."""


class ConfigError(WebhookInspectorError):
    """An environment variable holds an unusable value."""


class StorageError(WebhookInspectorError):
    """Reading from or writing to the webhook database failed."""
