"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (REST repositories,
    session storage, location and the offline catalog) used by use cases.

Dependencies:
    Individual submodules depend on ``requests``, filesystem APIs, and domain
    protocol definitions.

Call context:
    Imported by ``meetline.app.composition`` (for runtime wiring) and by tests
    (for mocks and transport-level behavior verification).
"""
