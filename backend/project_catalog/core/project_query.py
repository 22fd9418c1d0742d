"""Project Query Engine — structural filtering and projection over a loaded catalog.

Invariants:
    - Pure functions: no IO, no async, the catalog is never mutated
    - All supplied constraints are ANDed; an unset constraint (None) imposes no restriction
    - An empty ids/slugs tuple is a real constraint that matches nothing
    - `select` doubles as a presence filter: every selected attribute must be present
    - A projected record has exactly id, slug, select and optional keys — nothing else
    - Results keep catalog order

Design Decisions:
    - Presence is JS-style truthiness for scalars: None, False, "", 0 and NaN are "absent";
      empty lists/dicts count as present. Zero-like values are deliberately conflated
      with "not set" because callers filter on unconfigured flags that way
    - Projections are plain dicts; projection_model() builds a pydantic model for the
      requested shape so boundaries can validate it (select keys required and non-null)
    - Query attribute names validated against Project fields up front (InvalidQueryError)
      instead of silently matching nothing
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any, Callable, Iterable, Sequence, Union, get_args

from pydantic import BaseModel, ConfigDict, create_model

from project_catalog.core.domain_types import (
    IDENTITY_KEYS, PROJECT_ATTRIBUTES, Project, ProjectId,
)
from project_catalog.core.errors import InvalidQueryError

ProjectRow = dict[str, Any]


def _as_tuple(values: Iterable[str] | None) -> tuple[str, ...] | None:
    if values is None:
        return None
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ProjectQuery:
    """Query criteria plus projection keys.

    None means "unset" for every field; an empty tuple is an explicit constraint.
    """
    ids: tuple[ProjectId, ...] | None = None
    slugs: tuple[str, ...] | None = None
    select: tuple[str, ...] | None = None
    optional: tuple[str, ...] | None = None
    where: tuple[str, ...] | None = None
    where_not: tuple[str, ...] | None = None

    @classmethod
    def build(
        cls,
        ids: Iterable[str] | None = None,
        slugs: Iterable[str] | None = None,
        select: Iterable[str] | None = None,
        optional: Iterable[str] | None = None,
        where: Iterable[str] | None = None,
        where_not: Iterable[str] | None = None,
    ) -> "ProjectQuery":
        """Normalize iterables to tuples and validate attribute names."""
        query = cls(
            ids=_as_tuple(ids),
            slugs=_as_tuple(slugs),
            select=_as_tuple(select),
            optional=_as_tuple(optional),
            where=_as_tuple(where),
            where_not=_as_tuple(where_not),
        )
        validate_query(query)
        return query


def validate_query(query: ProjectQuery) -> None:
    """Reject attribute names that are not optional Project attributes."""
    named = [
        *(query.select or ()), *(query.optional or ()),
        *(query.where or ()), *(query.where_not or ()),
    ]
    unknown = sorted({key for key in named if key not in PROJECT_ATTRIBUTES})
    if unknown:
        raise InvalidQueryError(unknown)


def is_present(value: Any) -> bool:
    """Truthiness used by where/where_not/select filters."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, float) and math.isnan(value):
            return False
        return value != 0
    return True


def create_filter(query: ProjectQuery) -> Callable[[Project], bool]:
    """Build a predicate that ANDs every constraint set on the query."""
    def matches(project: Project) -> bool:
        return (
            (query.ids is None or project.id in query.ids)
            and (query.slugs is None or project.slug in query.slugs)
            and (query.select is None
                 or all(is_present(getattr(project, key)) for key in query.select))
            and (query.where is None
                 or all(is_present(getattr(project, key)) for key in query.where))
            and (query.where_not is None
                 or not any(is_present(getattr(project, key)) for key in query.where_not))
        )
    return matches


def projection_keys(query: ProjectQuery) -> tuple[str, ...]:
    """Identity keys, then select, then optional; duplicates dropped."""
    keys = [*IDENTITY_KEYS, *(query.select or ()), *(query.optional or ())]
    return tuple(dict.fromkeys(keys))


def create_projection(query: ProjectQuery) -> Callable[[Project], ProjectRow]:
    """Build a reshape function that copies only the requested keys."""
    keys = projection_keys(query)

    def project_row(project: Project) -> ProjectRow:
        return {key: getattr(project, key) for key in keys}
    return project_row


def find_one(projects: Sequence[Project], query: ProjectQuery) -> ProjectRow | None:
    """First project matching the query, projected; None when nothing matches."""
    matches = create_filter(query)
    for project in projects:
        if matches(project):
            return create_projection(query)(project)
    return None


def find_many(projects: Sequence[Project], query: ProjectQuery) -> list[ProjectRow]:
    """All projects matching the query, in catalog order, projected."""
    matches = create_filter(query)
    project_row = create_projection(query)
    return [project_row(p) for p in projects if matches(p)]


# ─── Shape Validation ────────────────────────────────────────────

def _without_none(annotation: Any) -> Any:
    args = tuple(a for a in get_args(annotation) if a is not type(None))
    if not args:
        return annotation
    if len(args) == 1:
        return args[0]
    return Union[args]


@lru_cache(maxsize=128)
def _projection_model(
    select: frozenset[str], optional: frozenset[str],
) -> type[BaseModel]:
    fields: dict[str, Any] = {
        key: (Project.model_fields[key].annotation, ...) for key in IDENTITY_KEYS
    }
    for key in sorted(optional - select):
        fields[key] = (Project.model_fields[key].annotation, None)
    for key in sorted(select):
        fields[key] = (_without_none(Project.model_fields[key].annotation), ...)
    name = "ProjectWith_" + "_".join(sorted(select)) if select else "ProjectIdentity"
    return create_model(
        name, __config__=ConfigDict(extra="forbid", frozen=True), **fields,
    )


def projection_model(
    select: Iterable[str] | None = None, optional: Iterable[str] | None = None,
) -> type[BaseModel]:
    """Pydantic model for a projected row: select keys required, optional keys nullable."""
    query = ProjectQuery.build(select=select, optional=optional)
    return _projection_model(
        frozenset(query.select or ()), frozenset(query.optional or ()),
    )
