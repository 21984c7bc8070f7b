"""
Shared module package.

Contains cross-cutting concerns used across layers:
- Error translation (taxonomy to HTTP status + log record)
- Security middleware
- Rate limiting
- Logging configuration
"""
