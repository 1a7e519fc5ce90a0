"""Reconciliation of example and local configuration data.

The example file documents every key a scope needs; the local file
supplies real values. Reconciliation decides which mapping wins, or
why none can:

    example  local    outcome
    -------  -------  ---------------------------------------------
    absent   absent   Missing
    present  absent   FallbackOnly(example)
    absent   present  FallbackOnly(local)
    present  present  Reconciled(local), or Reconciled with missing
                      keys when local lacks keys declared by example

Extra keys in local are allowed.
"""

from dataclasses import dataclass, field
from enum import Enum

from scopeconf.parser import ConfigMapping


class ReconcileOutcome(str, Enum):
    """Reconciliation outcome tag."""

    MISSING = "missing"
    FALLBACK_ONLY = "fallback_only"
    RECONCILED = "reconciled"


class DataSource(str, Enum):
    """Which file the final mapping came from."""

    EXAMPLE = "example"
    LOCAL = "local"


@dataclass(frozen=True)
class Reconciliation:
    """Result of reconciling example and local data.

    Attributes:
        outcome: Which of the three cases applied.
        data: Final mapping (None for MISSING).
        source: File the final mapping came from (None for MISSING).
        missing_keys: Example keys absent from local, in example order.
    """

    outcome: ReconcileOutcome
    data: ConfigMapping | None = None
    source: DataSource | None = None
    missing_keys: list[str] = field(default_factory=list)


def reconcile(
    example: ConfigMapping | None, local: ConfigMapping | None
) -> Reconciliation:
    """Reconcile example and local data.

    Args:
        example: Data from the example file, None if absent.
        local: Data from the local file, None if absent.

    Returns:
        Reconciliation describing the outcome.
    """
    if example is None and local is None:
        return Reconciliation(outcome=ReconcileOutcome.MISSING)

    if local is None:
        return Reconciliation(
            outcome=ReconcileOutcome.FALLBACK_ONLY,
            data=example,
            source=DataSource.EXAMPLE,
        )

    if example is None:
        return Reconciliation(
            outcome=ReconcileOutcome.FALLBACK_ONLY,
            data=local,
            source=DataSource.LOCAL,
        )

    return Reconciliation(
        outcome=ReconcileOutcome.RECONCILED,
        data=local,
        source=DataSource.LOCAL,
        missing_keys=[key for key in example if key not in local],
    )
