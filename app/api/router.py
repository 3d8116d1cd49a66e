from fastapi import APIRouter

from app.api.routes import users
from app.modules.connections import routes as connections
from app.modules.messages import routes as messages

api_router = APIRouter(prefix="/api")

api_router.include_router(users.router, tags=["users"])
api_router.include_router(connections.router)
api_router.include_router(messages.router)
