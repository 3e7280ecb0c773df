"""Data models for the kmet dashboard.

- core: Pod/node metrics, trends and log lines
- cache: Bounded trend buffers
- state: Settings and dashboard state
"""
