"""Tests for the rule registry and message formatting."""

import pytest

from attestation_test_policy.models.finding import Finding
from attestation_test_policy.rules import (
    RULES,
    TEST_DATA_MISSING,
    TEST_RESULT_SKIPPED,
    TEST_RESULT_UNSUPPORTED,
    format_message,
)


@pytest.mark.parametrize(
    ("template", "args", "expected"),
    [
        ("No test data found", (), "No test data found"),
        ("Test %q was skipped", ("unit-test",), 'Test "unit-test" was skipped'),
        (
            "Test %q has unsupported result %q",
            ("lint", "BOGUS"),
            'Test "lint" has unsupported result "BOGUS"',
        ),
        ("%s of %s passed (100%%)", (3, 3), "3 of 3 passed (100%)"),
    ],
)
def test_format_message(template: str, args: tuple[object, ...], expected: str) -> None:
    """Renders %q quoted, %s plain and %% as a literal percent sign."""
    assert format_message(template, *args) == expected


def test_format_message_quotes_embedded_quotes() -> None:
    """Escapes double quotes inside %q values."""
    assert format_message("Test %q", 'say "hi"') == 'Test "say \\"hi\\""'


def test_format_message_rejects_argument_mismatch() -> None:
    """Raises ValueError when argument count doesn't match the template."""
    with pytest.raises(ValueError, match="expects 2 argument"):
        format_message("Test %q has unsupported result %q", "lint")


def test_registry_covers_every_rule() -> None:
    """Registry is keyed by short name."""
    assert set(RULES) == {
        "test_data_missing",
        "test_results_missing",
        "test_result_unsupported",
        "test_result_failures",
        "test_result_skipped",
        "test_result_warning",
    }
    assert all(name == rule.short_name for name, rule in RULES.items())


def test_severities() -> None:
    """Only skipped and warning rules are non-blocking."""
    warn_rules = {name for name, rule in RULES.items() if rule.severity == "warn"}

    assert warn_rules == {"test_result_skipped", "test_result_warning"}


def test_finding_without_arguments() -> None:
    """Builds a finding without a term."""
    finding = TEST_DATA_MISSING.finding()

    assert finding.rule == "test_data_missing"
    assert finding.code == "test.test_data_missing"
    assert finding.term is None
    assert finding.message == "No test data found"
    assert finding.severity == "deny"


def test_finding_with_arguments_and_term() -> None:
    """Formats the message and keeps the term independent of it."""
    finding = TEST_RESULT_UNSUPPORTED.finding("lint", "BOGUS", term="lint")

    assert finding.term == "lint"
    assert finding.message == 'Test "lint" has unsupported result "BOGUS"'
    assert finding.title == TEST_RESULT_UNSUPPORTED.title


def test_finding_identity_is_rule_and_term() -> None:
    """Findings with the same rule and term deduplicate in a set."""
    first = TEST_RESULT_UNSUPPORTED.finding("lint", "BOGUS", term="lint")
    second = TEST_RESULT_UNSUPPORTED.finding("lint", "OTHER", term="lint")
    other_task = TEST_RESULT_UNSUPPORTED.finding("e2e", "BOGUS", term="e2e")

    assert first == second
    assert {first, second, other_task} == {first, other_task}
    assert len({first, second, other_task}) == 2


def test_warn_rule_finding_severity() -> None:
    """Warn rules produce non-blocking findings."""
    finding = TEST_RESULT_SKIPPED.finding("unit-test", term="unit-test")

    assert finding == Finding(rule="test_result_skipped", term="unit-test", message="")
    assert finding.severity == "warn"
