"""Durable usage and settings state."""
