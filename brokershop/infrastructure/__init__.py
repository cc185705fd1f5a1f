# Infrastructure layer - database access
"""
Infrastructure layer contains the SQLite repositories.

Services in the application layer receive repositories through their
constructors and never open connections themselves.
"""
