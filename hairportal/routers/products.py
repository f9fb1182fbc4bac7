from fastapi import APIRouter, Request

from hairportal.routers import get_service

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
def list_products(request: Request):
    return get_service(request, "product_service").list()
