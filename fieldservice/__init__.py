"""Field-service management backend: jobs, clients, activities and calendars."""

__version__ = "1.0.0"
