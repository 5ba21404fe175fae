"""Dependency providers for the API routes."""
