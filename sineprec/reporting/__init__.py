"""
sineprec.reporting
==================

Text lines for the console and polars views for analysis.
"""
