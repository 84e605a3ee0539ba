"""Supplier page scrapers for the "Available Stock" figure."""
