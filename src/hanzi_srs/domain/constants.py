"""Centralized constants for hanzi-srs.

All scheduling numbers and session defaults live here so every layer
imports from a single source of truth.
"""

# ---------- SM-2 ----------
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3  # quality >= this counts as a successful recall
FAILED_INTERVAL = 1  # days
FIRST_INTERVAL = 1  # days
SECOND_INTERVAL = 6  # days

# ---------- Statistics ----------
LEARNED_REPETITIONS = 2
EASE_DISPLAY_PRECISION = 2

# ---------- Session Builder ----------
DEFAULT_DUE_LIMIT = 15
DEFAULT_NEW_LIMIT = 5

# ---------- Grading ----------
CORRECT_QUALITY = 4
INCORRECT_QUALITY = 2

# ---------- Vocabulary ----------
DEFAULT_LEVELS = [1, 2, 3]
