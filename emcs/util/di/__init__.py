from emcs.util.di.base import Provider, get_provider
from emcs.util.di.scope import Scope

__all__ = ["Provider", "Scope", "get_provider"]
