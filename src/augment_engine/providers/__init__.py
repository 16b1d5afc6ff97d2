"""Data providers and the priority-ordered fallback coordinator."""
