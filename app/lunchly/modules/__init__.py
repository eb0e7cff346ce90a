"""
Feature modules live under this package.

Each module owns its models and service functions; routes import from
services and reuse the platform primitives (config, DB session, errors).
"""
