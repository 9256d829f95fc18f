"""Recipe Server: CRUD API for recipe records."""

__version__ = "1.0.0"
