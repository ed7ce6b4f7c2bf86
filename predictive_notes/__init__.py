"""
predictive_notes

Local note taking with on-device next-word prediction.
Contains:
 - core: tokenizer, bigram model, predictor and the editing assist
 - session: per-note context, debounce timers and model refresh
 - storage: JSON key-value store, notes and preferences
 - tui_app / cli: Textual editor and Rich command line
"""

from .core import EditingAssist, PredictionPolicy, TextBuffer, build, predict, tokenize
from .session import EditingSession

__all__ = [
    "EditingAssist",
    "EditingSession",
    "PredictionPolicy",
    "TextBuffer",
    "build",
    "predict",
    "tokenize",
]

__version__ = "0.1.0"
