"""Scheduling services: store, constraint checks, access guard and rate limiter."""
