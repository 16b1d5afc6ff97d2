"""Collaborator contracts."""
