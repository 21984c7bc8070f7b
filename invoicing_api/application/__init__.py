"""
Application layer package.

Use cases orchestrate validation and repository calls.
They depend on domain ports only, never on concrete adapters.
"""
