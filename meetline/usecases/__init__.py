"""Use-case layer for the booking client.

Each module wraps one repository operation: presence checks on the inputs,
the awaited port call, and conversion of adapter failures into
``UseCaseError`` so view-models only ever see one error type.
"""
