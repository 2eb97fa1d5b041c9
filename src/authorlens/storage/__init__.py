"""Persistence of raw signatures (CSV cache) and resolved people (Parquet)."""
