"""Registration, login and user maintenance.

/login only checks credentials and returns the user; there are no tokens
or sessions.  GET /users and DELETE /users/{id} are unauthenticated
maintenance endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel

from coursehub.api.dependencies import StoreDep
from coursehub.api.schemas import DeletedOut, Ok, UserOut
from coursehub.services import identity_service

router = APIRouter(prefix="/api", tags=["users"])


class RegisterIn(BaseModel):
    name: str
    email: str
    password: str
    role: str


class LoginIn(BaseModel):
    email: str
    password: str


@router.post(
    "/register", response_model=Ok[UserOut], status_code=status.HTTP_201_CREATED
)
async def register(payload: RegisterIn, store: StoreDep) -> Ok[UserOut]:
    user = await identity_service.register(
        store,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return Ok(data=UserOut.model_validate(user))


@router.post("/login", response_model=Ok[UserOut])
async def login(payload: LoginIn, store: StoreDep) -> Ok[UserOut]:
    user = await identity_service.authenticate(
        store, email=payload.email, password=payload.password
    )
    return Ok(data=UserOut.model_validate(user))


@router.get("/users", response_model=Ok[list[UserOut]])
async def list_users(store: StoreDep) -> Ok[list[UserOut]]:
    users = await identity_service.list_users(store)
    return Ok(data=[UserOut.model_validate(u) for u in users])


@router.get("/users/{user_id}", response_model=Ok[UserOut])
async def get_user(user_id: UUID, store: StoreDep) -> Ok[UserOut]:
    user = await identity_service.get_user(store, user_id)
    return Ok(data=UserOut.model_validate(user))


@router.delete("/users/{user_id}", response_model=Ok[DeletedOut])
async def delete_user(user_id: UUID, store: StoreDep) -> Ok[DeletedOut]:
    await identity_service.delete_user(store, user_id)
    return Ok(data=DeletedOut(id=user_id))
