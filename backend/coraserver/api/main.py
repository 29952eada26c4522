from fastapi import APIRouter

from coraserver.api.routes import db, oauth

api_router = APIRouter()
api_router.include_router(oauth.router)
api_router.include_router(db.router)
