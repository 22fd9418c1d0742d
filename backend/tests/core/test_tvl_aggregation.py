"""TVL Aggregation tests — grouping, summing and display-unit conversion.

Tests cover:
    - Samples grouped per project, components summed independently
    - tvl is the sum of the three components
    - First-seen project order preserved
    - Arbitrary-precision ints survive large sums exactly
    - pick_tvl_for_projects sums a subset and divides by 100
    - Conversion stays exact for totals wider than the default decimal context
    - Unknown ids in the subset contribute nothing
    - Mock aggregate assigns the placeholder to every id
"""

from decimal import Decimal

from project_catalog.core.domain_types import MOCK_PROJECT_TVL, ProjectId, ProjectTvl
from project_catalog.core.tvl_aggregation import (
    aggregate_latest_values, mock_projects_tvl, pick_tvl_for_projects,
)

from tests.fakes import make_value


def _tvl(project_id: str, tvl: int) -> ProjectTvl:
    return ProjectTvl(ProjectId(project_id), tvl, 0, 0, tvl)


def test_groups_by_project_and_sums_components():
    values = [
        make_value("p1", canonical=100, external=10, native=1, data_source="ethereum"),
        make_value("p2", canonical=5),
        make_value("p1", canonical=200, external=20, native=2, data_source="arbitrum"),
    ]
    result = aggregate_latest_values(values)
    assert result == [
        ProjectTvl(ProjectId("p1"), canonical=300, external=30, native=3, tvl=333),
        ProjectTvl(ProjectId("p2"), canonical=5, external=0, native=0, tvl=5),
    ]


def test_empty_input_gives_empty_aggregate():
    assert aggregate_latest_values([]) == []


def test_large_values_sum_without_precision_loss():
    big = 10**30 + 1
    result = aggregate_latest_values([make_value("p", canonical=big, native=big)])
    assert result[0].tvl == 2 * big


def test_pick_tvl_for_subset_divides_by_hundred():
    aggregate = [_tvl("P1", 300), _tvl("P2", 700)]
    assert pick_tvl_for_projects(aggregate, [ProjectId("P1")]) == Decimal("3.00")
    assert str(pick_tvl_for_projects(aggregate, [ProjectId("P1")])) == "3.00"


def test_pick_tvl_for_all_projects():
    aggregate = [_tvl("P1", 300), _tvl("P2", 705)]
    assert pick_tvl_for_projects(aggregate, ["P1", "P2"]) == Decimal("10.05")


def test_pick_tvl_ignores_unknown_ids():
    aggregate = [_tvl("P1", 300)]
    assert pick_tvl_for_projects(aggregate, ["missing"]) == Decimal("0.00")


def test_mock_aggregate_covers_every_id():
    result = mock_projects_tvl([ProjectId("a"), ProjectId("b")])
    assert [e.project_id for e in result] == ["a", "b"]
    assert all(e.tvl == MOCK_PROJECT_TVL for e in result)


def test_pick_tvl_is_exact_beyond_default_decimal_precision():
    aggregate = [_tvl("P1", 10**30 + 1)]
    assert pick_tvl_for_projects(aggregate, ["P1"]) == Decimal("10000000000000000000000000000.01")
