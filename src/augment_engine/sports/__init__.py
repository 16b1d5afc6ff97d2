"""League catalogue and game status normalization."""
