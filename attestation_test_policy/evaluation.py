"""Evaluation of all test evidence rules against an attestation snapshot."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from attestation_test_policy.classifier import check_outcomes
from attestation_test_policy.extractor import extract
from attestation_test_policy.models.attestation import Attestation
from attestation_test_policy.models.finding import Finding
from attestation_test_policy.models.vocabulary import OutcomeVocabulary
from attestation_test_policy.rules import RULES, Rule
from attestation_test_policy.validator import check_test_data, check_test_results

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Evaluation:
    """Findings of one evaluation, split by severity."""

    violations: frozenset[Finding]
    warnings: frozenset[Finding]
    successes: Sequence[Rule]

    @property
    def findings(self) -> frozenset[Finding]:
        """All findings regardless of severity."""
        return self.violations | self.warnings


def evaluate(
    attestations: Iterable[Attestation],
    vocabulary: OutcomeVocabulary | None = None,
) -> Evaluation:
    """Evaluate the test evidence rules.

    Args:
        attestations: Verified attestations of the build
        vocabulary: Outcome rule data; the default vocabulary when omitted

    Returns:
        Violations, warnings and the rules that produced no finding

    """
    vocabulary = vocabulary or OutcomeVocabulary()
    extraction = extract(attestations)
    log.debug("Found %d test output record(s)", len(extraction.outputs))

    findings = (
        check_test_data(extraction)
        | check_test_results(extraction.outputs)
        | check_outcomes(extraction.outputs, vocabulary)
    )

    triggered = {finding.rule for finding in findings}
    return Evaluation(
        violations=frozenset(f for f in findings if f.severity == "deny"),
        warnings=frozenset(f for f in findings if f.severity == "warn"),
        successes=tuple(
            rule for name, rule in RULES.items() if name not in triggered
        ),
    )
