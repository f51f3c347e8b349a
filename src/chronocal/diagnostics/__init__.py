"""Diagnostics package.

- era_boundaries: dates around each era change of a date-bound chronology
- hijrah_table: month/year length statistics of a Hijrah variant (optional plot)
- round_trip: randomized epoch-day round trip through every chronology
"""

__all__ = ["era_boundaries", "hijrah_table", "round_trip"]
