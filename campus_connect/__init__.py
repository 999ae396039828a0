"""Campus Connect — college-affiliated content sharing API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
