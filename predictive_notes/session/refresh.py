# refresh.py
# Model refresh driver and the in-process compute host.
#
# The editing surface never waits for a model. Each refresh sends a
# {"op": "predict", "text": ...} request to a ComputeHost and tags it with a
# generation number; only the response to the newest request is published.
# Publishing is a single reference swap, so readers see the old model or the
# new one and never a half-built table.
# ---------------------------------------------------------------------

from __future__ import annotations
from typing import Callable, Optional

from predictive_notes.core.ngram_model import DEFAULT_ORDER, Model, build_from_text, model_size
from predictive_notes.core.protocols import ComputeHost, ComputeRequest
from predictive_notes.utils.logger_utils import Log


class LocalComputeHost:
    """Builds models in-process. Stands in for a background worker context."""

    def __init__(self, n: int = DEFAULT_ORDER):
        self.n = n

    def handle(self, message: ComputeRequest) -> Optional[Model]:
        if not isinstance(message, dict) or message.get("op") != "predict":
            Log.warning(f"[ComputeHost] unknown request: {message!r}")
            return None
        return build_from_text(message.get("text") or "", self.n)

    async def request(self, message: ComputeRequest) -> Optional[Model]:
        return self.handle(message)


class ModelRefreshDriver:
    """
    Owns the published model reference.

    Public API:
      model             - latest completed model (or None)
      await refresh(t)  - rebuild from a text snapshot; stale responses are dropped
      generation        - id of the newest request issued
    """

    def __init__(
        self,
        host: Optional[ComputeHost] = None,
        on_published: Optional[Callable[[Optional[Model]], None]] = None,
    ):
        self.host = host or LocalComputeHost()
        self.model: Optional[Model] = None
        self.generation = 0
        self._on_published = on_published

    async def refresh(self, text: str) -> bool:
        """Returns True when this request's model was published."""
        self.generation += 1
        ticket = self.generation
        try:
            model = await self.host.request({"op": "predict", "text": text})
        except Exception as e:
            Log.error(f"[RefreshDriver] compute request {ticket} failed: {e!r}")
            return False

        if ticket != self.generation:
            Log.debug(f"[RefreshDriver] dropped stale response {ticket} (newest {self.generation})")
            return False

        self.model = model
        prefixes, entries = model_size(model)
        Log.debug(f"[RefreshDriver] published model {ticket}: {prefixes} prefixes, {entries} candidates")
        if self._on_published is not None:
            self._on_published(model)
        return True
