"""
Shared error handling package.

Centralizes error-to-HTTP translation so that invoicing errors
are consistently turned into a log record and a status code.
"""
