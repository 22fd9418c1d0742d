"""Route Modules — one file per feature (health, projects, data availability, zk catalog).

Invariants:
    - Each module defines its own APIRouter with a /api/v1 prefix and tags
    - Routes never filter, aggregate or cache themselves
"""
