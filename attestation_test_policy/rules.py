"""Rule metadata registry and finding construction."""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass

from attestation_test_policy.models.finding import Finding, Severity

PLACEHOLDER = re.compile(r"%([qs%])")


def format_message(template: str, *args: object) -> str:
    """Render a failure message template.

    ``%q`` renders the argument as a double-quoted string, ``%s`` renders it
    as is and ``%%`` is a literal percent sign.

    Raises:
        ValueError: If the number of arguments does not match the template

    """
    expected = sum(1 for m in PLACEHOLDER.finditer(template) if m.group(1) != "%")
    if expected != len(args):
        raise ValueError(
            f"Template {template!r} expects {expected} argument(s), got {len(args)}"
        )

    values = iter(args)

    def substitute(match: re.Match[str]) -> str:
        verb = match.group(1)
        if verb == "%":
            return "%"
        value = next(values)
        if verb == "q":
            return json.dumps(str(value))
        return str(value)

    return PLACEHOLDER.sub(substitute, template)


@dataclass(frozen=True, kw_only=True)
class Rule:
    """Static identity of a policy rule."""

    short_name: str
    title: str
    description: str
    failure_msg: str
    severity: Severity = "deny"

    @property
    def code(self) -> str:
        """Fully qualified rule code."""
        return f"test.{self.short_name}"

    def finding(self, *args: object, term: str | None = None) -> Finding:
        """Build a finding for this rule."""
        return Finding(
            rule=self.short_name,
            term=term,
            message=format_message(self.failure_msg, *args),
            title=self.title,
            description=self.description,
            severity=self.severity,
        )


TEST_DATA_MISSING = Rule(
    short_name="test_data_missing",
    title="No test data found",
    description=(
        "None of the tasks in the pipeline included a TEST_OUTPUT "
        "task result, which is where Tekton tasks write test results."
    ),
    failure_msg="No test data found",
)

TEST_RESULTS_MISSING = Rule(
    short_name="test_results_missing",
    title="Test data is missing the results key",
    description=(
        "Each test result is expected to have a 'result' key. Verify that "
        "the 'result' key is present in all the TEST_OUTPUT task results."
    ),
    failure_msg="Found tests without results",
)

TEST_RESULT_UNSUPPORTED = Rule(
    short_name="test_result_unsupported",
    title="Unsupported result in test data",
    description=(
        "This policy expects a set of known/supported results in the test "
        "data. It is a failure if we encounter a result that is not supported."
    ),
    failure_msg="Test %q has unsupported result %q",
)

TEST_RESULT_FAILURES = Rule(
    short_name="test_result_failures",
    title="Test result is FAILURE or ERROR",
    description=(
        "All the tests in the test results are required to complete "
        "successfully. An outcome listed in the failed_tests_results rule "
        "data blocks the release."
    ),
    failure_msg="Test %q did not complete successfully",
)

TEST_RESULT_SKIPPED = Rule(
    short_name="test_result_skipped",
    title="Some tests were skipped",
    description=(
        "Collects all tests that have their result set to a skipped outcome."
    ),
    failure_msg="Test %q was skipped",
    severity="warn",
)

TEST_RESULT_WARNING = Rule(
    short_name="test_result_warning",
    title="Some tests returned a warning",
    description=(
        "Collects all tests that have their result set to a warning outcome."
    ),
    failure_msg="Test %q returned a warning",
    severity="warn",
)

RULES: Mapping[str, Rule] = {
    rule.short_name: rule
    for rule in (
        TEST_DATA_MISSING,
        TEST_RESULTS_MISSING,
        TEST_RESULT_UNSUPPORTED,
        TEST_RESULT_FAILURES,
        TEST_RESULT_SKIPPED,
        TEST_RESULT_WARNING,
    )
}
