"""
Combat log parsing: typed events and the line tokenizer that produces them.
"""

from .events import GameLogEvent, DamageDealtEvent
from .tokenizer import LineTokenizer, DEFAULT_ATTACK_PATTERN

__all__ = ["GameLogEvent", "DamageDealtEvent", "LineTokenizer", "DEFAULT_ATTACK_PATTERN"]
