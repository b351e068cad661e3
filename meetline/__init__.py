"""MeetLine booking client: domain, adapters, use cases and screen view-models."""

__version__ = "1.0.0"
