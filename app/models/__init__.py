"""
SQLModel table models.

Importing this package registers every table on SQLModel.metadata, which is
what create_tables() and the test fixtures build the schema from.
"""

from app.models.favorite import Favorites
from app.models.review import Reviews
from app.models.user import Users
from app.models.vote import Votes

__all__ = [
    "Users",
    "Reviews",
    "Votes",
    "Favorites",
]
