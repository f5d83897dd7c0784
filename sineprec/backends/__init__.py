"""
sineprec.backends
=================

Storage backends for run records.
"""
