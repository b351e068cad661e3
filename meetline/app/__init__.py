"""Application composition layer for the booking client.

Modules here read settings, wire adapters, use cases and view-models, and
run the headless session behind ``python -m meetline``. No business logic.
"""
