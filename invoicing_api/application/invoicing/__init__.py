"""
Use cases for the invoicing bounded context.
"""
