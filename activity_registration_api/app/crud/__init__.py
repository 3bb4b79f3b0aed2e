"""
Query functions for activities and registrations.

Services combine these inside a ``Database.connection`` or
``Database.transaction`` block; the functions themselves never commit.
"""
