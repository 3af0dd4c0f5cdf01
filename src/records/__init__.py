"""Record marshalling layer.

This package maps record fields to storage keys and moves values
between records and stores inside store transactions.
"""
