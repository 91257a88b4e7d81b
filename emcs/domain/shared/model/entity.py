from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base class for identity-bearing domain objects."""

    model_config = ConfigDict(validate_assignment=True)


class Aggregate(Entity):
    """Consistency boundary. Only the owning service mutates an aggregate.

    ``version`` is bumped by the store on every successful write and compared
    on the next one (optimistic concurrency).
    """

    version: int = 0
