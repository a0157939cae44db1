"""Request pieces shared by several endpoint modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from ..exceptions import BuilderConsumedError
from ..types import JSONType

T = TypeVar("T")


class RequestBuilder(Generic[T]):
    """Base for fluent builders that hand their state over on build().

    Subclasses keep the request under construction in ``self._state``. Once
    ``_consume()`` has handed it out, every further access raises
    BuilderConsumedError instead of silently reusing stale state.
    """

    def __init__(self, state: T):
        self._state: Optional[T] = state

    @property
    def consumed(self) -> bool:
        return self._state is None

    def _current(self) -> T:
        if self._state is None:
            raise BuilderConsumedError(f"{type(self).__name__} has already been built")
        return self._state

    def _consume(self) -> T:
        state = self._current()
        self._state = None
        return state


@dataclass
class FileHashesRequest:
    """Body of the endpoints that act on a list of files (delete, archive, ...)."""
    hashes: List[str] = field(default_factory=list)
    file_service_name: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def of(cls, hashes: Iterable[str], **kwargs) -> "FileHashesRequest":
        return cls(hashes=list(hashes), **kwargs)

    def to_json(self) -> Dict[str, JSONType]:
        data: Dict[str, JSONType] = {"hashes": list(self.hashes)}
        if self.file_service_name is not None:
            data["file_service_name"] = self.file_service_name
        if self.reason is not None:
            data["reason"] = self.reason
        return data
