# predictive_notes/session/__init__.py
# per-note editing context, debounce timers and the model refresh driver

from .debounce import Debouncer, loop_scheduler
from .refresh import LocalComputeHost, ModelRefreshDriver
from .editing_session import EditingSession

__all__ = [
    "Debouncer",
    "loop_scheduler",
    "LocalComputeHost",
    "ModelRefreshDriver",
    "EditingSession",
]
