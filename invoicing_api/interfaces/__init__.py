"""
Interface layer package.

FastAPI routers and Pydantic schemas. Routes only translate HTTP
into use case calls; they hold no business logic.
"""
