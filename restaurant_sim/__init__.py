"""Deterministic restaurant operations simulation driven by external management decisions."""
