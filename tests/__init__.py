"""
Test suite for the live combat log tracker.
"""
