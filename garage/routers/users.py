# garage/routers/users.py
"""User profile — dual-table update (users + garage_auth) and lookup."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from garage.database import get_db
from garage.schemas.user import UserUpdateRequest
from garage.services import employee_service
from garage.services.user_sync_service import update_user_across_tables
from garage.utils.responses import respond

router = APIRouter()


@router.put("/user/update", summary="Update a user profile and its auth record")
def update_user(body: UserUpdateRequest, db: Session = Depends(get_db)):
    """
    Partial update. A first/last name change regenerates the login ID,
    returned as newLoginId.
    """
    result = update_user_across_tables(db, body.user_uid, body.updates.partial())
    return JSONResponse(status_code=result.status_code, content=result.to_dict())


@router.get("/user/{user_uid}", summary="Fetch a user profile")
def get_user(user_uid: str, db: Session = Depends(get_db)):
    return respond(employee_service.get_user_by_uid(db, user_uid), key="user")
