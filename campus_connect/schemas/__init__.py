"""API Schemas — Pydantic request/response models validated at the HTTP boundary."""
