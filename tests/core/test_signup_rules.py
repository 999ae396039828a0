"""Signup Rules — pre-submission checks, errors collected as values."""

import uuid

from campus_connect.core.domain_types import CollegeId, Domain, Institution
from campus_connect.core.signup_rules import check_signup


def _college(domain="college.edu") -> Institution:
    return Institution(id=CollegeId(uuid.uuid4()), name="State", domain=Domain(domain))


def test_valid_signup_with_matching_domain():
    result = check_signup("Student@College.EDU", "Sam", True, _college())
    assert result["valid"] is True
    assert result["domain"] == "college.edu"
    assert result["domain_matches_college"] is True
    assert result["errors"] == []


def test_non_matching_domain_is_not_an_error():
    result = check_signup("sam@gmail.com", "Sam", True, _college())
    assert result["valid"] is True
    assert result["domain_matches_college"] is False


def test_missing_college_selection():
    result = check_signup("sam@college.edu", "Sam", False, None)
    assert result["valid"] is False
    assert "Please select your college" in result["errors"]
    assert result["college_found"] is False


def test_unknown_college_selection():
    result = check_signup("sam@college.edu", "Sam", True, None)
    assert result["errors"] == ["Selected college does not exist"]


def test_collects_every_problem():
    result = check_signup("not-an-email", "  ", False, None)
    assert result["email_valid"] is False
    assert result["domain"] == ""
    assert len(result["errors"]) == 3
