"""Logging, tracing and metric helpers."""
