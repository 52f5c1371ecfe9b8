from fastapi import APIRouter
from app.api.endpoints import auth, donations, reservations, export

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(donations.router, prefix="/donations", tags=["donations"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])
api_router.include_router(export.router, tags=["export"])
