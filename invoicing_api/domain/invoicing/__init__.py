"""
Invoicing bounded context: entities, errors, ports and request context.
"""
