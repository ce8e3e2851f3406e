"""
Pydantic schema definitions for API payloads.

Request schemas accept loosely typed values so that the services can
report field errors with their own messages; response schemas describe
the rows returned to clients.
"""
