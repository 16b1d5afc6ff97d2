"""Domain objects, orchestrator states and API schemas."""
