# predictive_notes/utils/__init__.py
# logging and JSON config helpers shared by the core, session and surfaces

from .logger_utils import Log
from .config_manager import Config

__all__ = ["Log", "Config"]
