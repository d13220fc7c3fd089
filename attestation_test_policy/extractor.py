"""Locating test output records in pipeline-run attestations."""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from attestation_test_policy.models.attestation import Attestation, TestResultPayload

log = logging.getLogger(__name__)

PIPELINE_RUN_BUILD_TYPES = frozenset(
    {
        "tekton.dev/v1beta1/PipelineRun",
        "https://tekton.dev/attestations/chains/pipelinerun@v2",
    }
)

TEST_OUTPUT_RESULT_NAMES = frozenset({"TEST_OUTPUT", "HACBS_TEST_OUTPUT"})


@dataclass(frozen=True, kw_only=True)
class TestOutput:
    """A test output record extracted from a task.

    ``payload`` is None when the raw value could not be decoded at all.
    """

    __test__ = False

    task: str
    payload: TestResultPayload | None

    @property
    def result(self) -> Any:
        """Reported outcome, None when absent."""
        if self.payload is None:
            return None
        return self.payload.result


def is_pipelinerun_attestation(attestation: Attestation) -> bool:
    """Check whether the attestation describes a pipeline run."""
    return attestation.statement.predicate.build_type in PIPELINE_RUN_BUILD_TYPES


def pipelinerun_attestations(
    attestations: Iterable[Attestation],
) -> Iterator[Attestation]:
    """Yield only the pipeline-run attestations."""
    for attestation in attestations:
        if is_pipelinerun_attestation(attestation):
            yield attestation
        else:
            log.debug(
                "Skipping attestation with build type %s",
                attestation.statement.predicate.build_type,
            )


def parse_payload(value: object) -> TestResultPayload | None:
    """Decode a raw task result value into a test result payload.

    Tekton task results are strings, so the value is usually JSON text. An
    already decoded mapping is accepted as well. Anything that does not
    decode is returned as None and later reported as a record without results.
    """
    try:
        if isinstance(value, str):
            return TestResultPayload.model_validate_json(value)
        if isinstance(value, Mapping):
            return TestResultPayload.model_validate(value)
    except ValidationError as e:
        log.warning("Unable to decode test output: %s", e.errors(include_url=False))
        return None

    log.warning("Unexpected test output value type: %s", type(value).__name__)
    return None


def task_test_outputs(attestation: Attestation) -> Iterator[TestOutput]:
    """Yield the test output records of a single attestation."""
    for task in attestation.statement.predicate.build_config.tasks:
        for task_result in task.results:
            if task_result.name not in TEST_OUTPUT_RESULT_NAMES:
                continue
            yield TestOutput(task=task.name, payload=parse_payload(task_result.value))


def iter_test_outputs(attestations: Iterable[Attestation]) -> Iterator[TestOutput]:
    """Lazily yield every test output record of the pipeline-run attestations."""
    for attestation in pipelinerun_attestations(attestations):
        yield from task_test_outputs(attestation)


@dataclass(frozen=True, kw_only=True)
class Extraction:
    """Test output records together with the pipeline-run guard outcome."""

    has_pipelinerun: bool
    outputs: Sequence[TestOutput]


def extract(attestations: Iterable[Attestation]) -> Extraction:
    """Apply the pipeline-run guard once and collect the test output records."""
    runs = tuple(pipelinerun_attestations(attestations))
    return Extraction(
        has_pipelinerun=bool(runs),
        outputs=tuple(
            output for attestation in runs for output in task_test_outputs(attestation)
        ),
    )
