"""Timekeeping package.

Turns raw clock punches into daily attendance facts (lateness, undertime,
hours worked, absence) against Manila wall-clock time. Organized by feature
modules (punches, accounting, schedules) with repository and service layers.
"""
