"""Models for Tekton Chains pipeline-run attestations."""

from collections.abc import Sequence
from typing import Any

from pydantic import ConfigDict, Field

from attestation_test_policy.models.base import Model


class TaskResult(Model):
    """A named result emitted by a pipeline task."""

    name: str = Field(..., description="Result name, e.g. TEST_OUTPUT")
    value: Any = Field(default=None, description="Raw result value")


class PipelineTask(Model):
    """One task of the pipeline run as recorded in the build config."""

    name: str = Field(..., description="Pipeline task name")
    results: Sequence[TaskResult] = Field(
        default_factory=list, description="Results emitted by the task"
    )


class BuildConfig(Model):
    """Build configuration section of the provenance predicate."""

    tasks: Sequence[PipelineTask] = Field(
        default_factory=list, description="Tasks executed by the pipeline run"
    )


class Predicate(Model):
    """SLSA provenance predicate."""

    build_type: str = Field(..., alias="buildType", description="Build type URI")
    build_config: BuildConfig = Field(
        default_factory=BuildConfig,
        alias="buildConfig",
        description="Recorded build configuration",
    )


class Statement(Model):
    """In-toto statement wrapping the provenance predicate."""

    predicate_type: str = Field(
        default="https://slsa.dev/provenance/v0.2", alias="predicateType"
    )
    predicate: Predicate


class Attestation(Model):
    """A verified attestation as handed over by the retrieval layer."""

    statement: Statement


class TestResultPayload(Model):
    """Parsed content of a test output task result.

    Only ``result`` is interpreted and it may hold any JSON value. Counters,
    timestamps and any other fields are kept as extras without validation.
    """

    __test__ = False

    model_config = ConfigDict(frozen=True, extra="allow")

    result: Any = Field(default=None, description="Reported outcome")
