"""Reporting views over cleaned layoff records.

This package computes read-only aggregate tables such as rankings,
rolling totals, and year-over-year deltas. Views never mutate records.
"""
