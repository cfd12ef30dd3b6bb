"""Savepoint lookup backends.

This package finds the newest savepoint in a filesystem directory or an
object-store prefix. The resolver picks a backend from the URI scheme.
"""
