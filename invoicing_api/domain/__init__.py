"""
Domain layer package.

Pure business objects and contracts. No framework imports,
no database access, no HTTP concerns.
"""
