from fastapi import APIRouter

from todo_portal.api.v1.routes_auth import router as auth_router
from todo_portal.api.v1.routes_todos import router as todos_router
from todo_portal.api.v1.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(todos_router, prefix="/todos", tags=["todos"])
api_router.include_router(users_router, prefix="/users", tags=["users"])
