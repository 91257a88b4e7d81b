from typing import ClassVar, Literal

from dishka import Provider as DishkaProvider

Component = Literal["ledger"]


class Provider(DishkaProvider):
    """Base for all DI providers.

    Attributes:
        __mock_component__: Component name for swappable components (None otherwise)
        __is_mock__: Whether this is the stub implementation of the component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False


def get_provider(base: type[Provider], use_mock: bool = False) -> type[Provider]:
    """Get appropriate provider class.

    - No subclasses: concrete provider, use directly
    - Has subclasses: swappable component, select by __is_mock__ flag

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", None) or base.__name__
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl
