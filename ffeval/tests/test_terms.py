# ffeval/tests/test_terms.py
"""
Unit tests for term resolution, comparison and membership.
"""


import pytest

from ffeval.errors.evaluation import (
    MalformedExpression,
    UnsupportedMembershipTarget,
    UnsupportedOperator,
)
from ffeval.services.rollout import rollout
from ffeval.services.terms import compare, contains, parse_number, resolve_term


CTX = {"userId": "u20", "country": "CA", "ver": 2.0, "beta": True}


# ---------- resolve_term ----------


@pytest.mark.parametrize("text", ["true", "TRUE", "True", "  tRuE  "])
def test_true_literal_is_case_insensitive(text):
    assert resolve_term(text, {}, "k") is True


def test_false_literal():
    assert resolve_term("False", {}, "k") is False


@pytest.mark.parametrize(
    "text, expected",
    [("2", 2.0), ("-1.5e2", -150.0), ("0.20", 0.2), (".5", 0.5)],
)
def test_number_literals(text, expected):
    value = resolve_term(text, {}, "k")
    assert isinstance(value, float)
    assert value == expected


def test_quoted_strings_are_unquoted():
    assert resolve_term("'CA'", {}, "k") == "CA"
    assert resolve_term('"CA"', {}, "k") == "CA"
    assert resolve_term("''", {}, "k") == ""


def test_mismatched_quotes_are_still_a_string():
    assert resolve_term("'CA\"", {}, "k") == "CA"
    assert resolve_term("\"CA'", {}, "k") == "CA"


def test_lone_quote_is_not_a_string_literal():
    assert resolve_term("'", {}, "k") is None


def test_identifier_lookup():
    assert resolve_term("country", CTX, "k") == "CA"
    assert resolve_term("ver", CTX, "k") == 2.0
    assert resolve_term("beta", CTX, "k") is True


def test_unknown_identifier_is_null_not_failure():
    assert resolve_term("missing", CTX, "k") is None


def test_literal_forms_take_precedence_over_identifiers():
    ctx = {"true": "shadowed", "1": "shadowed"}
    assert resolve_term("true", ctx, "k") is True
    assert resolve_term("1", ctx, "k") == 1.0


def test_rollout_term_uses_flag_key_and_user_id():
    assert resolve_term("rollout(0.20)", CTX, "paywall") is True
    assert resolve_term("rollout( 0.5 )", CTX, "paywall") == rollout(
        "paywall", "u20", 0.5
    )
    assert resolve_term("rollout(0)", CTX, "paywall") is False
    assert resolve_term("rollout(1)", CTX, "paywall") is True


def test_rollout_without_string_user_id_hashes_empty_user():
    expected = rollout("paywall", "", 0.5)
    assert resolve_term("rollout(0.5)", {}, "paywall") == expected
    assert resolve_term("rollout(0.5)", {"userId": 42.0}, "paywall") == expected


@pytest.mark.parametrize("text", ["rollout(abc)", "rollout()", "rollout('0.5')"])
def test_rollout_with_non_numeric_argument_fails(text):
    with pytest.raises(MalformedExpression):
        resolve_term(text, CTX, "paywall")


def test_parse_number_rejects_non_literals():
    assert parse_number("1_000") is None
    assert parse_number(" 1") is None
    assert parse_number("") is None
    assert parse_number("abc") is None
    assert parse_number("1e3") == 1000.0


# ---------- compare ----------


def test_mismatched_types_never_match():
    assert compare("a", "==", 1.0) is False
    assert compare("a", "!=", 1.0) is False
    assert compare(True, "==", 1.0) is False
    assert compare("true", "==", True) is False


def test_null_never_matches():
    assert compare(None, "==", None) is False
    assert compare(None, "!=", "x") is False
    assert compare(1.0, "<", None) is False


def test_string_equality_only():
    assert compare("CA", "==", "CA") is True
    assert compare("CA", "!=", "US") is True
    with pytest.raises(UnsupportedOperator):
        compare("a", "<", "b")


def test_boolean_equality_only():
    assert compare(True, "==", True) is True
    assert compare(True, "!=", False) is True
    with pytest.raises(UnsupportedOperator):
        compare(True, ">", False)


def test_number_ordering():
    assert compare(3.0, ">=", 2.0) is True
    assert compare(2.0, ">=", 2.0) is True
    assert compare(2.0, ">", 2.0) is False
    assert compare(1.0, "<", 2.0) is True
    assert compare(2.0, "<=", 1.0) is False


def test_number_equality_tolerates_float_rounding():
    assert compare(0.1 + 0.2, "==", 0.3) is True
    assert compare(0.1 + 0.2, "!=", 0.3) is False
    assert compare(1.0, "==", 1.001) is False


def test_plain_ints_compare_as_numbers():
    assert compare(2, "==", 2.0) is True
    assert compare(3, ">", 2.5) is True


# ---------- contains ----------


def test_membership_exact_match():
    assert contains("EU", "('EU','APAC')") is True
    assert contains("NA", "('EU','APAC')") is False
    assert contains("eu", "('EU','APAC')") is False


def test_membership_tolerates_whitespace_and_either_quote():
    assert contains("APAC", "( 'EU' , \"APAC\" )") is True
    assert contains("APAC", "('EU', \"APAC')") is True


def test_membership_ignores_unquoted_items():
    assert contains("EU", "(EU, 'APAC')") is False
    assert contains("1", "(1, 2)") is False


def test_membership_non_string_left_is_false():
    assert contains(1.0, "('1')") is False
    assert contains(None, "('EU')") is False
    # Target is not inspected when left is not a string.
    assert contains(True, "not a list") is False


def test_membership_requires_parenthesized_list():
    with pytest.raises(UnsupportedMembershipTarget):
        contains("EU", "'EU'")
    with pytest.raises(UnsupportedMembershipTarget):
        contains("EU", "['EU']")


def test_membership_empty_list():
    assert contains("EU", "()") is False


def test_ints_beyond_float_range_widen_to_infinity():
    assert compare(10 ** 400, ">", 1.0) is True
    assert compare(-(10 ** 400), "<", -1e308) is True
    assert compare(10 ** 400, "==", 1.0) is False
