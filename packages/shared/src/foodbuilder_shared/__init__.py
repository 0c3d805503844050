"""Shared infrastructure for the FoodBuilder platform.

Provides the Firebase endpoint constants, the error taxonomy, configuration
loading, the HTTP client factory, and the Pydantic boundary models used by
the auth, data-access and app components.
"""
