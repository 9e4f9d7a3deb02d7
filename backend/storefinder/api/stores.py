# 스토어 JSON API 라우터 (클라이언트 스크립트용)
# - GET /api/search?q=              : 텍스트 검색, 관련도순 최대 5개
# - GET /api/stores/near?lat=&lng=  : 10km 이내 최대 10개
#
# 주니어 개발자님께: lat/lng 범위를 Query에서 검증하므로
# 숫자가 아니거나 NaN/범위 밖이면 422 응답이 나갑니다.

from typing import List

from fastapi import APIRouter, Depends, Query

from ..models.store import StorePin
from ..schemas.store_schema import SearchHit
from ..services.store_service import StoreService, get_store_service

router = APIRouter(tags=["api"])


@router.get("/search", response_model=List[SearchHit], summary="스토어 텍스트 검색")
async def search(q: str = Query(""), service: StoreService = Depends(get_store_service)):
    return await service.search_stores(q)


@router.get("/stores/near", response_model=List[StorePin], summary="좌표 주변 스토어")
async def stores_near(
    lat: float = Query(..., ge=-90, le=90, allow_inf_nan=False),
    lng: float = Query(..., ge=-180, le=180, allow_inf_nan=False),
    service: StoreService = Depends(get_store_service),
):
    return await service.stores_near(lng, lat)
