"""Firestore data access for the categories collection."""
