"""JSON HTTP API for projects, workshops and competitions run by teachers."""

__version__ = "0.1.0"