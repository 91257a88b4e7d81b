"""Custom Dishka scopes for EMCS."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """EMCS dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (stores, ledger client, executor)
    - UOW: Unit of Work (one HTTP request or CLI invocation)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
