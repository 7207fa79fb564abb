"""Persistence layer: engine/session, models, schemas and DAOs."""
