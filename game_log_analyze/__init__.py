"""
Game Log Analyzer

Tails a combat log and reports live damage-per-second, total damage
and hit-size statistics for the most recent sliding time window.
"""

__version__ = "0.1.0"
__author__ = "Game Log Analyzer Team"
