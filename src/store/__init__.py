"""Run persistence and SDK layer.

This package writes cleaned records, report tables, and run manifests.
It also hosts the client that ties reading, cleaning, and reporting together.
"""
