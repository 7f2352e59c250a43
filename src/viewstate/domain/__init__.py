"""Adapter-free core of the working-copy reconciliation engine."""
