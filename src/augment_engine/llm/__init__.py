"""LLM classifier adapters."""
