"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are frozen; changes go through ``model_copy(update=...)`` and
    are persisted by a repository.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)
