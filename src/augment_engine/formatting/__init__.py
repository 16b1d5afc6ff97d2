"""Context rendering for prompt injection."""
