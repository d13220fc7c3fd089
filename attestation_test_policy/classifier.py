"""Classification of reported test outcomes."""

from collections.abc import Iterable
from enum import StrEnum

from attestation_test_policy.extractor import TestOutput
from attestation_test_policy.models.finding import Finding
from attestation_test_policy.models.vocabulary import OutcomeVocabulary
from attestation_test_policy.rules import (
    TEST_RESULT_FAILURES,
    TEST_RESULT_SKIPPED,
    TEST_RESULT_UNSUPPORTED,
    TEST_RESULT_WARNING,
)


class OutcomeCategory(StrEnum):
    """Meaning of a reported outcome under a vocabulary."""

    UNSUPPORTED = "unsupported"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    WARNING = "warning"


def classify(
    outcome: object, vocabulary: OutcomeVocabulary
) -> frozenset[OutcomeCategory]:
    """Return every category the outcome belongs to.

    Outcomes that are not strings are always unsupported. The failed, skipped
    and warning memberships are checked independently, so overlapping
    vocabularies yield more than one category.
    """
    if (
        not isinstance(outcome, str)
        or outcome not in vocabulary.supported_tests_results
    ):
        return frozenset({OutcomeCategory.UNSUPPORTED})

    categories: set[OutcomeCategory] = set()
    if outcome in vocabulary.failed_tests_results:
        categories.add(OutcomeCategory.FAILED)
    if outcome in vocabulary.skipped_tests_results:
        categories.add(OutcomeCategory.SKIPPED)
    if outcome in vocabulary.warned_tests_results:
        categories.add(OutcomeCategory.WARNING)

    return frozenset(categories or {OutcomeCategory.SUCCESS})


def check_outcomes(
    outputs: Iterable[TestOutput], vocabulary: OutcomeVocabulary
) -> frozenset[Finding]:
    """Report unsupported, failed, skipped and warning outcomes per task."""
    findings: set[Finding] = set()

    for output in outputs:
        if (outcome := output.result) is None:
            continue
        categories = classify(outcome, vocabulary)

        if OutcomeCategory.UNSUPPORTED in categories:
            findings.add(
                TEST_RESULT_UNSUPPORTED.finding(output.task, outcome, term=output.task)
            )
        if OutcomeCategory.FAILED in categories:
            findings.add(TEST_RESULT_FAILURES.finding(output.task, term=output.task))
        if OutcomeCategory.SKIPPED in categories:
            findings.add(TEST_RESULT_SKIPPED.finding(output.task, term=output.task))
        if OutcomeCategory.WARNING in categories:
            findings.add(TEST_RESULT_WARNING.finding(output.task, term=output.task))

    return frozenset(findings)
