"""Shape checks on extracted test output records."""

import logging
from collections.abc import Iterable, Sequence

from attestation_test_policy.extractor import Extraction, TestOutput
from attestation_test_policy.models.finding import Finding
from attestation_test_policy.rules import TEST_DATA_MISSING, TEST_RESULTS_MISSING

log = logging.getLogger(__name__)


def with_results(outputs: Iterable[TestOutput]) -> Sequence[TestOutput]:
    """Return the records carrying a usable ``result`` field."""
    return [output for output in outputs if output.result is not None]


def check_test_data(extraction: Extraction) -> frozenset[Finding]:
    """Report the absence of any test output in a pipeline-run attestation."""
    if extraction.outputs or not extraction.has_pipelinerun:
        return frozenset()
    return frozenset({TEST_DATA_MISSING.finding()})


def check_test_results(outputs: Sequence[TestOutput]) -> frozenset[Finding]:
    """Report records without results.

    A single finding covers every malformed record.
    """
    valid = with_results(outputs)
    if len(valid) >= len(outputs):
        return frozenset()

    log.info(
        "%d of %d test output(s) lack a result",
        len(outputs) - len(valid),
        len(outputs),
    )
    return frozenset({TEST_RESULTS_MISSING.finding()})
