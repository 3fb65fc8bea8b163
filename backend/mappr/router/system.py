from fastapi import APIRouter

from mappr.core.config import APP_VERSION
from mappr.models.common import APIResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=APIResponse)
def root():
    return APIResponse(code=0, msg="ok", data={"msg": "Mappr API. See /docs for endpoints."})


@router.get("/health", response_model=APIResponse)
def health_check():
    return APIResponse(
        code=0,
        msg="ok",
        data={"status": "healthy", "service": "mappr-server", "version": APP_VERSION},
    )
