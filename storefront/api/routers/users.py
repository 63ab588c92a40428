# storefront/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import UserCreate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.post("/", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, svc: UserService = Depends(get_service)):
    """Tworzy użytkownika, istniejący id zwraca bez zmian."""
    return svc.create_user(payload)


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, svc: UserService = Depends(get_service)):
    try:
        return svc.get_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
