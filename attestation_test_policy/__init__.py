"""Release policy checks for test evidence in pipeline-run attestations."""

from attestation_test_policy.evaluation import Evaluation, evaluate

__all__ = ["Evaluation", "evaluate"]
