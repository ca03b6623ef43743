from __future__ import annotations

__all__ = ["AbstractQuery"]

from typing import TYPE_CHECKING

from ..core.exceptions import BadRequestError

if TYPE_CHECKING:
    from .builder import Builder
    from .collection import Collection


class AbstractQuery:
    """Reusable query.

    Subclasses add their clauses in compile. Use Builder.apply to run
    one against a builder.
    """

    _builder: Builder | None

    def __init__(self, builder: Builder | None = None):
        self._builder = builder

    def compile(self, builder: Builder) -> Builder:
        raise NotImplementedError

    def set_builder(self, builder: Builder) -> None:
        self._builder = builder

    def get_builder(self) -> Builder:
        if self._builder is None:
            raise BadRequestError("Query is not bound to a builder")
        return self._builder

    def build(self) -> Builder:
        return self.compile(self.get_builder().clone())

    def to_dict(self) -> dict:
        return self.build().to_dict()

    def get(self) -> Collection:
        return self.build().get()
