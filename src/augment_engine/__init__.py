"""Consent-gated tool orchestration for a local assistant."""
