# File: app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import admin, auditor, auth, clerk, manager, notifications, products, users

# Create main API router
api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(manager.router, prefix="/manager", tags=["manager"])
api_router.include_router(clerk.router, prefix="/clerk", tags=["clerk"])
api_router.include_router(auditor.router, prefix="/auditor", tags=["auditor"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])


@api_router.get("/health", tags=["health"])
def health_check():
    return {"status": "ok", "message": "Inventra API is running"}
