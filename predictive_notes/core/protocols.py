# predictive_notes/core/protocols.py
"""
Protocol interfaces for the collaborators the editing session talks to.

The session depends on these rather than on concrete classes so tests can
swap in memory stores and scripted compute hosts.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable
from typing_extensions import Literal, TypedDict

from predictive_notes.core.ngram_model import Model


class ComputeRequest(TypedDict):
    """Message sent from the editing surface to the model host."""
    op: Literal["predict"]
    text: str


@runtime_checkable
class KeyValueStore(Protocol):
    """Storage collaborator for notes and preferences."""

    def load(self, key: str, default: Any = None) -> Any:
        """Return the stored value or `default`. Raises StorageError on failure."""
        ...

    def save(self, key: str, value: Any) -> bool:
        """Persist `value` under `key`. Raises StorageError on failure."""
        ...


@runtime_checkable
class ComputeHost(Protocol):
    """Builds models, possibly in another execution context."""

    async def request(self, message: ComputeRequest) -> Optional[Model]:
        """Answer a compute request with a model, or None when unavailable."""
        ...
