"""Governance Tracker package.

Feature modules (users, meetings, committees, submissions, ...) sit on top of a
profile key/value store; the Flask controllers are a thin presentation layer
over the service classes.
"""

__version__ = "1.0.0"
