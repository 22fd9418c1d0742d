"""Domain Types — verifies Project model and value types.

Tests:
    - NewType wrappers are transparent
    - Project requires id and slug, defaults every other attribute to None
    - Project is frozen and rejects unknown attributes
    - PROJECT_ATTRIBUTES excludes identity keys
"""

import pytest
from pydantic import ValidationError

from project_catalog.core.domain_types import (
    ChainId, IDENTITY_KEYS, PROJECT_ATTRIBUTES, Project, ProjectId,
)


def test_identity_types_wrap_primitives():
    assert ProjectId("arbitrum") == "arbitrum"
    assert ChainId(1) == 1


def test_project_requires_identity():
    with pytest.raises(ValidationError):
        Project(id=ProjectId("a"))


def test_optional_attributes_default_to_none():
    project = Project(id=ProjectId("a"), slug="a")
    assert all(getattr(project, key) is None for key in PROJECT_ATTRIBUTES)


def test_project_is_frozen():
    project = Project(id=ProjectId("a"), slug="a")
    with pytest.raises(ValidationError):
        project.name = "changed"


def test_project_rejects_unknown_attributes():
    with pytest.raises(ValidationError):
        Project(id=ProjectId("a"), slug="a", color="red")


def test_project_attributes_exclude_identity():
    assert not set(IDENTITY_KEYS) & PROJECT_ATTRIBUTES
    assert "zk_catalog_info" in PROJECT_ATTRIBUTES
