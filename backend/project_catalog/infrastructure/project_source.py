"""JSON Project Source — reads the project catalog from a JSON file.

Invariants:
    - File must hold a JSON array of project objects (or {"projects": [...]})
    - Every entry validated against the Project model; one bad entry fails the load
    - All failures (missing file, bad encoding, bad JSON, schema mismatch) raise
      CatalogSourceError

Design Decisions:
    - File read in a worker thread (asyncio.to_thread): keeps the event loop free
      while a large catalog is parsed
    - pydantic TypeAdapter over per-item model_validate: one validation pass with
      indexed error locations
"""

import asyncio
import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from project_catalog.core.domain_types import Project
from project_catalog.core.errors import CatalogSourceError

logger = logging.getLogger(__name__)

_projects_adapter = TypeAdapter(list[Project])


def parse_projects(raw: object, source: str = "<memory>") -> list[Project]:
    """Validate decoded JSON into Project models."""
    if isinstance(raw, dict):
        raw = raw.get("projects")
    if not isinstance(raw, list):
        raise CatalogSourceError("expected a list of projects", source)
    try:
        return _projects_adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogSourceError(
            f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}", source,
        ) from e


class JsonFileProjectSource:
    """ProjectSource backed by a JSON file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def fetch_projects(self) -> list[Project]:
        logger.info(f"Reading project catalog from {self.path}")
        raw = await asyncio.to_thread(self._read)
        return parse_projects(raw, str(self.path))

    def _read(self) -> object:
        try:
            with self.path.open(encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise CatalogSourceError(str(e), str(self.path)) from e
        except UnicodeDecodeError as e:
            raise CatalogSourceError(f"invalid UTF-8: {e}", str(self.path)) from e
        except json.JSONDecodeError as e:
            raise CatalogSourceError(f"invalid JSON: {e}", str(self.path)) from e
