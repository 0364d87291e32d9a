from fastapi import APIRouter

from flatmate.api.routes import audit, contact, listings, profile, saved

api_router = APIRouter()
api_router.include_router(listings.router)
api_router.include_router(contact.router)
api_router.include_router(saved.router)
api_router.include_router(profile.router)
api_router.include_router(audit.router)
