"""Game domain services: guessing rounds, ranking and score reconciliation.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics. Only ``store`` knows about the database.
"""
