"""
HTTP layer.

Each module in ``routes`` defines an ``APIRouter`` for one resource
(auth, categories, products).  ``router.py`` aggregates them and the
application includes the aggregate router at the root path.
"""
