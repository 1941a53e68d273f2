"""Ingestion boundary.

Realtime payloads are validated here before they are allowed to reach the
metric store.
"""
