"""learn-python: a small educational HTTP microservice."""

__version__ = "0.0.1"
