"""
Infrastructure adapters for the invoicing bounded context.
"""
