"""Server-rendered web routes."""

from fastapi import APIRouter

from poseidon.api.web import auth, health, reference, user

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
for resource in reference.RESOURCES:
    router.include_router(
        reference.build_crud_router(resource), prefix=f"/{resource.name}", tags=[resource.name]
    )
router.include_router(user.router, prefix="/user", tags=["user"])
