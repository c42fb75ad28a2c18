"""Configuration constants for spelling safari."""

import os

MIN_LEVEL = 1
MAX_LEVEL = 100
DEFAULT_LEVEL = 50
LEVEL_STEP = 5                # Levels gained or lost per round

# Level progression (sentence accuracy, percent)
ADVANCE_ACCURACY_THRESHOLD = 80  # At or above this the player moves up
DEMOTE_ACCURACY_THRESHOLD = 50   # Below this the player moves down

# Difficulty selection for sentence generation
HARD_ACCURACY_THRESHOLD = 80  # accuracy must exceed this...
HARD_LEVEL_THRESHOLD = 50     # ...and level must exceed this for "hard"
EASY_ACCURACY_THRESHOLD = 50  # accuracy below this gives "easy"
EASY_LEVEL_THRESHOLD = 30     # level below this gives "easy"

DIFFICULTY_EASY = 'easy'
DIFFICULTY_MEDIUM = 'medium'
DIFFICULTY_HARD = 'hard'

ERRORS_PER_SENTENCE = 2

# Seconds the submission celebration stays visible
CELEBRATION_SECONDS = 3

# User-visible messages
FETCH_FAILED_MESSAGE = 'Error fetching sentence. Please try again.'
ANALYSIS_FAILED_MESSAGE = 'Analysis failed. Please try again.'
NO_ERRORS_MESSAGE = 'No errors detected. Excellent work!'

ENCOURAGEMENTS = [
    "Great job! No mistakes!",
    "Fantastic! You're perfect!",
    "Kudos! No errors found!",
    "Excellent work, all correct!",
    "Bravo! You made no mistakes!",
    "Superb performance!",
    "Impressive! No errors detected!",
    "You're a spelling champ!",
    "Outstanding! No errors!",
    "Keep it up! Perfect round!"
]

# Server
DEFAULT_GEMINI_MODEL = 'gemini-2.0-flash'
DEFAULT_PORT = 3000
CONFIG_FILE = os.path.expanduser('~/.config/spelling-safari/config.json')
