"""
sineprec.backends.polars
========================

In-memory Polars frames.
"""
