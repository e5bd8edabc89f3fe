"""Event-management backend: signup/login and owner-scoped event CRUD."""

__version__ = "0.1.0"
