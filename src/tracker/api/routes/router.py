from fastapi import APIRouter

from src.tracker.api.routes import auth, config, projects, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(config.router)
