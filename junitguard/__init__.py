"""Secure ingestion and aggregation of JUnit XML test reports."""

__version__ = '0.1'
