"""
predictive_notes.core

The on-device predictive text engine and the editing assist.
Contains:
 - word tokenizer and bigram model builder
 - next-word predictor (max-frequency or Laplace-smoothed sampling)
 - text buffer, auto-closure and list continuation
 - the keystroke command dispatcher (EditingAssist)
"""

from .tokenizer import tokenize
from .ngram_model import Candidate, Model, build, build_from_text
from .predictor import PredictionPolicy, predict
from .text_buffer import TextBuffer, WordSpan, caret_location
from .editing_assist import (
    AssistFlags,
    ContextMenu,
    EditingAssist,
    EditOutcome,
    Enter,
    Tab,
    TypeChar,
)

__all__ = [
    "tokenize",
    "Candidate",
    "Model",
    "build",
    "build_from_text",
    "PredictionPolicy",
    "predict",
    "TextBuffer",
    "WordSpan",
    "caret_location",
    "AssistFlags",
    "ContextMenu",
    "EditingAssist",
    "EditOutcome",
    "Enter",
    "Tab",
    "TypeChar",
]
