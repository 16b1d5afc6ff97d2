"""Intent classification and query sanitization."""
