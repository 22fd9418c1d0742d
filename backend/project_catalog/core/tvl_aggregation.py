"""TVL Aggregation — group latest value samples by project and sum their components.

Invariants:
    - Pure functions: no IO, no async, no caching
    - Components are summed as ints (arbitrary precision); conversion to display
      units happens only in pick_tvl_for_projects
    - ProjectTvl.tvl == canonical + external + native
    - Output order follows the first appearance of each project in the input

Design Decisions:
    - Decimal for display units: exact division by 100 under a
      context sized to the total, so sums of any magnitude convert without rounding
    - pick_tvl_for_projects is a projection over an already-cached aggregate,
      so callers can slice one cached result for many project subsets
"""

from decimal import Decimal, localcontext
from typing import Iterable, Sequence

from project_catalog.core.domain_types import (
    CENTS_PER_UNIT, MOCK_PROJECT_TVL, ProjectId, ProjectTvl, ValueRecord,
)

_DISPLAY_QUANTUM = Decimal("0.01")


def aggregate_latest_values(values: Iterable[ValueRecord]) -> list[ProjectTvl]:
    """Reduce value samples to one ProjectTvl per project."""
    sums: dict[ProjectId, list[int]] = {}
    for value in values:
        acc = sums.setdefault(value.project_id, [0, 0, 0])
        acc[0] += value.canonical
        acc[1] += value.external
        acc[2] += value.native

    return [
        ProjectTvl(
            project_id=project_id,
            canonical=canonical,
            external=external,
            native=native,
            tvl=canonical + external + native,
        )
        for project_id, (canonical, external, native) in sums.items()
    ]


def pick_tvl_for_projects(
    aggregate: Sequence[ProjectTvl], project_ids: Iterable[ProjectId],
) -> Decimal:
    """Sum tvl over a project subset and convert cents to display units."""
    wanted = set(project_ids)
    total = sum(entry.tvl for entry in aggregate if entry.project_id in wanted)
    with localcontext() as ctx:
        # Enough digits that division and quantize never round
        ctx.prec = max(ctx.prec, len(str(abs(total))) + 2)
        return (Decimal(total) / CENTS_PER_UNIT).quantize(_DISPLAY_QUANTUM)


def mock_projects_tvl(project_ids: Iterable[ProjectId]) -> list[ProjectTvl]:
    """Placeholder aggregate for environments without live data."""
    return [
        ProjectTvl(
            project_id=project_id, canonical=MOCK_PROJECT_TVL,
            external=0, native=0, tvl=MOCK_PROJECT_TVL,
        )
        for project_id in project_ids
    ]
