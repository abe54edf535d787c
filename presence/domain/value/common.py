"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable value compared by its fields."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Immutable wrapper around a single primitive (e.g. a Username).

    The wrapped value is available as ``.root`` and ``model_dump()`` returns
    the primitive itself.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
