"""Models for policy findings."""

from dataclasses import dataclass, field
from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["deny", "warn"]


@dataclass(frozen=True, kw_only=True)
class Finding:
    """A diagnostic produced by a rule.

    Identity is the ``(rule, term)`` pair: two findings for the same rule and
    subject compare equal regardless of message, so collecting findings in a
    set deduplicates them.
    """

    rule: str
    term: str | None = None
    message: str = field(compare=False)
    title: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    severity: Severity = field(default="deny", compare=False)

    @property
    def code(self) -> str:
        """Fully qualified rule code as reported by the policy engine."""
        return f"test.{self.rule}"
