"""TLS certificate probing, expiry tracking, endpoint discovery and blast-radius trees."""

__version__ = "0.1.0"