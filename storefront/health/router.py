from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from storefront.health.service import health_stripe_info
from storefront.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/stripe")
def health_stripe(request: Request):
    info = health_stripe_info()
    info["rate_limit"] = rate_limit_health_info(request)
    return JSONResponse(info)
