"""
Service layer.

Each service encapsulates the rules for one resource.  Services take
an explicit sqlite3 connection and raise ``ServiceError`` subclasses
from ``core.errors``; they never build HTTP responses themselves.
"""
