"""Core Layer — pure calendar logic, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from api/, schemas/ or infrastructure/
    - Functions take the TermDatabase explicitly; nothing is cached at module level
"""
