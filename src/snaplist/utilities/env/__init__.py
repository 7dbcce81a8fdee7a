"""Environment configuration helpers."""

from snaplist.utilities.env.config import Configuration as Configuration
from snaplist.utilities.env.enums import ExhaustionSignal as ExhaustionSignal
