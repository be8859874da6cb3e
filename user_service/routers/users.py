from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from user_service.deps import get_user_store
from user_service.models import DeleteResponse, UserCreate, UserOut, UserUpdate
from user_service.user_store import (
    InMemoryUserStore,
    UsernameConflictError,
    UserNotFoundError,
    UserValidationError,
)

router = APIRouter(prefix="/users", tags=["users"])

# Handlers are plain `def` so FastAPI runs them in its threadpool; the store is
# shared across those threads.


@router.get("", response_model=list[UserOut])
def list_users(
    page: Optional[int] = None,
    size: Optional[int] = None,
    store: InMemoryUserStore = Depends(get_user_store),
) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in store.list(page=page, size=size)]


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, store: InMemoryUserStore = Depends(get_user_store)) -> UserOut:
    try:
        return UserOut.model_validate(store.get(user_id))
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=UserOut, status_code=201)
def create_user(
    payload: UserCreate = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
):
    try:
        user = store.create(username=payload.username, age=payload.age)
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UsernameConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    out = UserOut.model_validate(user).model_dump()
    return JSONResponse(out, status_code=201, headers={"Location": f"/users/{user.id}"})


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    payload: UserUpdate = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> UserOut:
    try:
        user = store.update(user_id, username=payload.username, age=payload.age)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UserValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UsernameConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return UserOut.model_validate(user)


@router.delete("/{user_id}", response_model=DeleteResponse)
def delete_user(user_id: int, store: InMemoryUserStore = Depends(get_user_store)) -> DeleteResponse:
    try:
        removed = store.delete(user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return DeleteResponse(message=f"User with ID {user_id} deleted.", user=UserOut.model_validate(removed))
