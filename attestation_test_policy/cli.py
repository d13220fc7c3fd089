"""CLI entry point for the test evidence policy."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from attestation_test_policy.evaluation import Evaluation, evaluate
from attestation_test_policy.loader import load_attestations, load_rule_data
from attestation_test_policy.models.attestation import Attestation
from attestation_test_policy.models.finding import Finding

SEVERITY_SYMBOLS = {
    "deny": "✗",
    "warn": "!",
}


def log_findings_summary(log: logging.Logger, evaluation: Evaluation) -> None:
    """Log a formatted summary of the findings."""
    log.info("=" * 80)
    log.info("Test Evidence Summary:")
    log.info("=" * 80)

    for finding in sorted_findings(evaluation.findings):
        symbol = SEVERITY_SYMBOLS.get(finding.severity, "?")
        log.info("%s %s: %s", symbol, finding.code, finding.message)

    log.info(
        "%d violation(s), %d warning(s), %d success(es)",
        len(evaluation.violations),
        len(evaluation.warnings),
        len(evaluation.successes),
    )


def sorted_findings(findings: Iterable[Finding]) -> Sequence[Finding]:
    """Order findings by rule and term for stable output."""
    return sorted(findings, key=lambda f: (f.rule, f.term or ""))


def format_finding(finding: Finding) -> dict[str, Any]:
    """Format a finding the way the policy engine reports results."""
    metadata: dict[str, Any] = {
        "code": finding.code,
        "title": finding.title,
        "description": finding.description,
    }
    if finding.term is not None:
        metadata["term"] = finding.term
    return {"msg": finding.message, "metadata": metadata}


def format_output(evaluation: Evaluation) -> dict[str, Any]:
    """Format an evaluation for JSON output."""
    return {
        "violations": [
            format_finding(f) for f in sorted_findings(evaluation.violations)
        ],
        "warnings": [
            format_finding(f) for f in sorted_findings(evaluation.warnings)
        ],
        "successes": [
            {
                "msg": "Pass",
                "metadata": {
                    "code": rule.code,
                    "title": rule.title,
                    "description": rule.description,
                },
            }
            for rule in evaluation.successes
        ],
    }


async def run(
    attestation_paths: Sequence[Path],
    rule_data_path: Path | None = None,
) -> int:
    """Evaluate the attestations and return exit code."""
    log = logging.getLogger("attestation_test_policy")

    log.info("Loading rule data from %s", rule_data_path or "defaults")
    vocabulary = await load_rule_data(rule_data_path)

    attestations: list[Attestation] = []
    for path in attestation_paths:
        log.info("Loading attestations from %s", path)
        attestations.extend(await load_attestations(path))

    log.info("Evaluating %d attestation(s)...", len(attestations))
    evaluation = evaluate(attestations, vocabulary)

    log_findings_summary(log, evaluation)

    print(json.dumps(format_output(evaluation), indent=2))

    return 1 if evaluation.violations else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Check pipeline-run attestations for passing test evidence"
    )
    parser.add_argument(
        "--attestation",
        type=Path,
        action="append",
        required=True,
        help="Path to an attestation JSON file (repeatable)",
    )
    parser.add_argument(
        "--rule-data",
        type=Path,
        default=None,
        help="Path to a YAML rule data file with the test outcome vocabulary",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            attestation_paths=args.attestation,
            rule_data_path=args.rule_data,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
