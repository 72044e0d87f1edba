"""Adapters – integrations with concrete web frameworks."""
