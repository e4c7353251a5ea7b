"""Workforce analytics engine.

This package is organized by feature modules (records, sessions, analytics,
projection). Every entry point is a pure function of the record snapshot it
is given; persistence and presentation live outside the package.
"""
