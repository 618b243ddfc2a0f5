"""Route group exports."""

from . import attendance, auth, health, locations, reports, users, vacations

__all__ = ["attendance", "auth", "health", "locations", "reports", "users", "vacations"]
