"""
jobly.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, repositories, and the
  partial-update SQL builder.
"""

# Package marker.
