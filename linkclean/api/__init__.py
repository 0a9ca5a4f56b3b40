"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from linkclean.api import app

    uvicorn linkclean.api:app --reload
"""

from linkclean.api.app import app

__all__ = ["app"]
