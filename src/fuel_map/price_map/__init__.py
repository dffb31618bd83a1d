"""Forecourt price map app: CSV ingestion, price scale and map rendering."""
