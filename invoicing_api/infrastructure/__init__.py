"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the connection pool and the
PostgreSQL repository.
"""
