from fastapi import APIRouter

from assetdesk.api.v1 import activity, assets, auth, categories, import_routes

api_router = APIRouter()

TENANT_PREFIX = "/tenants/{slug}"

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(categories.router, prefix=f"{TENANT_PREFIX}/categories", tags=["categories"])
api_router.include_router(import_routes.router, prefix=f"{TENANT_PREFIX}/assets/import", tags=["import"])
api_router.include_router(assets.router, prefix=f"{TENANT_PREFIX}/assets", tags=["assets"])
api_router.include_router(activity.router, prefix=f"{TENANT_PREFIX}/activity", tags=["activity"])
