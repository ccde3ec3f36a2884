"""User routes: ratings received."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studymatch.database import get_db
from studymatch.deps import get_current_user
from studymatch.models.user import User
from studymatch.schemas.rating import RatingWithRaterResponse
from studymatch.services import ratings

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/ratings", response_model=list[RatingWithRaterResponse])
async def user_ratings(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Ratings addressed to the user, newest first, with who gave them."""
    return await ratings.list_ratings_for_user(db, user_id)
