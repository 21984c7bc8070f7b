"""
Database plumbing shared by repository adapters.
"""
