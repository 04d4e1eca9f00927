"""Data ingestion and cleaning pipeline.

This package reads the raw layoffs export and stages it as typed records.
It also owns the orchestration that runs cleaning stages in order.
"""
