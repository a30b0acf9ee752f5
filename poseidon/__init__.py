"""Poseidon: administration console for financial reference data."""
