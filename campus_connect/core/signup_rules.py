"""Signup Rules — pre-submission checks for the signup form.

Invariants:
    - check_signup is PURE and total: every input yields a result dict, never raises
    - A college must be explicitly selected; it is never inferred at signup
    - domain_matches_college is informational — a mismatch is not an error,
      it only means the account will not be domain-verified

Design Decisions:
    - Errors collected as a list (all problems at once) so the form can show them together
"""

from campus_connect.core.affiliation import extract_domain, is_valid_email_format
from campus_connect.core.domain_types import Institution, NO_DOMAIN


def check_signup(
    email: str,
    display_name: str,
    college_selected: bool,
    college: Institution | None,
) -> dict:
    """Validate a signup submission against the selected college."""
    errors: list[str] = []
    domain = extract_domain(email)

    if not display_name.strip():
        errors.append("Display name is required")
    email_valid = is_valid_email_format(email)
    if not email_valid:
        errors.append("Please enter a valid email address.")
    if not college_selected:
        errors.append("Please select your college")
    elif college is None:
        errors.append("Selected college does not exist")

    matches = (
        college is not None and domain != NO_DOMAIN and domain == college.domain
    )
    return {
        "valid": not errors,
        "email_valid": email_valid,
        "domain": domain,
        "college_found": college is not None,
        "domain_matches_college": matches,
        "errors": errors,
    }
