"""Roster Sync package.

Shift roster data model, derived views and the pull/push engine that keeps a
single JSON cycle document in sync with a hosted content store. Organized by
feature modules (shifts, groups, cycles, stats, sync, ...) with a thin Flask
controller layer over service classes.
"""
