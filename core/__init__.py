"""Core (transport-agnostic) form-response analytics.

This package contains:
- settings read from the environment
- the Google Sheets row source (cell grid -> pandas records)
- timestamp parsing and period bucketing
- frequency / comparison aggregation and the analytics report
"""
