"""Projection engine: accumulation, decumulation and sustainability assessment."""
