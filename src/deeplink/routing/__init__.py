"""Routing — ordered route table with first-match-wins segment matching.

Entries are registered during setup and compiled into an immutable
lookup structure on first match.
"""
