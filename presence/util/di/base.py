"""Provider base class shared by every dishka provider in presence."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests swap for in-process fakes:
# "persistence" -> in-memory repositories, "billing" -> recording Stripe client
Component = Literal["persistence", "billing"]


class ProviderBase(Provider):
    """Dishka provider carrying mock-selection metadata.

    A component base sets ``__mock_component__``; its production and mock
    subclasses set ``__is_mock__``. Providers without subclasses are always
    used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
