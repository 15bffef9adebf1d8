"""
db/ - Database Layer
====================
Owns the PostgreSQL connection pool, the schema bootstrap and the error
kinds raised by the persistence code.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
