"""
Core calendar primitives and domain models.

This module contains pure, stateless quarter-boundary calculations that are
independent of any external system apart from the read-only time zone
database.
"""
