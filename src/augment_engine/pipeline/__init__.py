"""Confirmation-gated orchestration."""
