"""
API v1 Router
"""

from fastapi import APIRouter

from app.api.v1 import auth, books, favorites, profile, reviews, votes

router = APIRouter()

# Include all endpoint routers
router.include_router(auth.router)
router.include_router(profile.router)
router.include_router(books.router)
router.include_router(reviews.router)
router.include_router(votes.router)
router.include_router(favorites.router)

__all__ = ["router"]
