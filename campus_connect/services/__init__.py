"""Services Layer — async orchestration between core rules and repositories.

Invariants:
    - Services receive Identity and collaborators explicitly
    - Pure decisions delegated to core/; IO delegated to infrastructure/
"""
