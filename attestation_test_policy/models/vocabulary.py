"""Outcome vocabulary supplied as rule data."""

from pydantic import Field

from attestation_test_policy.models.base import Model

DEFAULT_SUPPORTED = frozenset({"SUCCESS", "FAILURE", "ERROR", "SKIPPED", "WARNING"})
DEFAULT_FAILED = frozenset({"FAILURE", "ERROR"})
DEFAULT_SKIPPED = frozenset({"SKIPPED"})
DEFAULT_WARNED = frozenset({"WARNING"})


class OutcomeVocabulary(Model):
    """Recognized test outcome strings, partitioned by meaning.

    The failed, skipped and warned sets are not required to be disjoint.
    """

    supported_tests_results: frozenset[str] = Field(
        default=DEFAULT_SUPPORTED, description="Every valid outcome"
    )
    failed_tests_results: frozenset[str] = Field(
        default=DEFAULT_FAILED, description="Outcomes that block a release"
    )
    skipped_tests_results: frozenset[str] = Field(
        default=DEFAULT_SKIPPED, description="Outcomes reported as skipped"
    )
    warned_tests_results: frozenset[str] = Field(
        default=DEFAULT_WARNED, description="Outcomes reported as warnings"
    )
