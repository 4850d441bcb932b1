"""
Test suite for quarter-calendar

Contains:
- tests/unit/          : Unit tests for individual modules
"""
