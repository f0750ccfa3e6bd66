"""Roster System package.

Feature modules (students, attendance, reports, ...) sit on top of a single
RosterEngine that owns the in-memory collections and a storage layer that
mirrors them to a key-value text store. Flask controllers are a thin layer.
"""
