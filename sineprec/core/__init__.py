"""
sineprec.core
=============

Shared building blocks: typed names for the closed sets of distributions and
evaluators, the high-precision arithmetic context, and the abstract component
contracts every distribution and evaluator implements.
"""
