"""Exceptions raised by the calculators and the projection engine."""


class DomainError(ValueError):
    """An input violates a calculator precondition.

    Raised synchronously; callers validate before invoking and never retry.
    """
