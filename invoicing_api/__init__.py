"""
Invoicing API: CRUD service for service invoices backed by PostgreSQL.

Application package root. This is a small layered service using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - invoicing: Invoice creation, listing, lookup, update, deletion.

Layers:
    - domain: Entities, error taxonomy, request context, ports (ABCs).
    - application: Use cases, DTOs, explicit input validation.
    - infrastructure: Connection pool and PostgreSQL repository adapter.
    - interfaces: FastAPI routers, Pydantic schemas, dependency wiring.
    - shared: Cross-cutting concerns (error translation, security, logging).
"""
