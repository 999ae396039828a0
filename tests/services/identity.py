"""Identity helpers — build the X-User-* headers the auth gateway would send."""

import uuid


def identity_headers(
    user_id: uuid.UUID,
    email: str,
    name: str | None = None,
    college_id: uuid.UUID | None = None,
) -> dict:
    headers = {"X-User-Id": str(user_id), "X-User-Email": email}
    if name:
        headers["X-User-Name"] = name
    if college_id:
        headers["X-User-College-Id"] = str(college_id)
    return headers
