# 스토어 페이지 라우터 (서버 렌더링)
# - GET  /, /stores, /stores/page/{page} : 목록 (페이지당 4개)
# - GET  /add, POST /add                   : 생성 (로그인 필요)
# - GET  /stores/{id}/edit, POST /add/{id} : 수정 (소유자만)
# - GET  /stores/{slug}                    : 상세 + 리뷰
# - GET  /tags, /tags/{tag}, /top, /map
# - GET  /hearts, POST /hearts/{id}        : 하트(즐겨찾기)

from typing import Optional

from fastapi import APIRouter, Depends, Path, Request
from markupsafe import Markup

from ..core.exceptions import FormValidationError
from ..core.security import get_current_user, get_session, require_user
from ..core.session import Session
from ..core.templating import redirect, render
from ..models.user import User
from ..schemas.user_schema import HeartsResponse
from ..services.store_service import StoreService, get_store_service

router = APIRouter(tags=["stores"])


async def read_store_form(request: Request):
    form = await request.form()
    values = {
        "name": form.get("name", ""),
        "description": form.get("description", ""),
        "tags": form.getlist("tags"),
        "address": form.get("address", ""),
        "lng": form.get("lng", ""),
        "lat": form.get("lat", ""),
    }
    return values, form.get("photo")


def store_form_values(store) -> dict:
    return {
        "name": store.name,
        "description": store.description or "",
        "tags": list(store.tags),
        "address": store.location.address,
        "lng": store.location.lng,
        "lat": store.location.lat,
    }


async def _stores_page(request: Request, page: int, user: Optional[User], session: Session, service: StoreService):
    result = await service.get_stores_page(page)
    if result.out_of_range:
        session.flash("info", f"Hey! You asked for page {page}. But that doesn't exist. So I put you on page {result.pages}")
        return redirect(f"/stores/page/{result.pages}")
    return render(
        request, "stores.html", user=user, title="Stores",
        stores=result.stores, page=result.page, pages=result.pages, count=result.count,
    )


@router.get("/", name="home")
@router.get("/stores", name="stores")
async def stores(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
    session: Session = Depends(get_session),
    service: StoreService = Depends(get_store_service),
):
    return await _stores_page(request, 1, user, session, service)


@router.get("/stores/page/{page}", name="stores_page")
async def stores_page(
    request: Request,
    page: int = Path(..., ge=1),
    user: Optional[User] = Depends(get_current_user),
    session: Session = Depends(get_session),
    service: StoreService = Depends(get_store_service),
):
    return await _stores_page(request, page, user, session, service)


@router.get("/add", name="add_store")
async def add_store(request: Request, user: User = Depends(require_user)):
    return render(request, "edit_store.html", user=user, title="Add Store", form={}, action="/add")


@router.post("/add")
async def create_store(
    request: Request,
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
    service: StoreService = Depends(get_store_service),
):
    values, photo = await read_store_form(request)
    try:
        store = await service.create_store(values, photo, user)
    except FormValidationError as e:
        for message in e.messages:
            session.flash("error", message)
        return render(request, "edit_store.html", user=user, title="Add Store", form=e.values, action="/add")
    session.flash("success", f"Successfully created {store.name}. Care to leave a review?")
    return redirect(f"/stores/{store.slug}")


@router.get("/stores/{store_id}/edit", name="edit_store")
async def edit_store(
    request: Request,
    store_id: str,
    user: User = Depends(require_user),
    service: StoreService = Depends(get_store_service),
):
    store = await service.get_store_for_edit(store_id, user)
    return render(
        request, "edit_store.html", user=user, title=f"Edit {store.name}",
        store=store, form=store_form_values(store), action=f"/add/{store.id}",
    )


@router.post("/add/{store_id}")
async def update_store(
    request: Request,
    store_id: str,
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
    service: StoreService = Depends(get_store_service),
):
    values, photo = await read_store_form(request)
    try:
        store = await service.update_store(store_id, values, photo, user)
    except FormValidationError as e:
        for message in e.messages:
            session.flash("error", message)
        return render(
            request, "edit_store.html", user=user, title="Edit Store",
            form=e.values, action=f"/add/{store_id}",
        )
    session.flash(
        "success",
        Markup('Successfully updated <strong>{}</strong>. <a href="/stores/{}">View Store →</a>').format(store.name, store.slug),
    )
    return redirect(f"/stores/{store.id}/edit")


@router.get("/stores/{slug}", name="store")
async def store_detail(
    request: Request,
    slug: str,
    user: Optional[User] = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    detail = await service.get_store_by_slug(slug)
    return render(
        request, "store.html", user=user, title=detail.store.name,
        store=detail.store, author=detail.author, reviews=detail.reviews,
    )


@router.get("/tags", name="tags")
@router.get("/tags/{tag}", name="tag")
async def tags(
    request: Request,
    tag: Optional[str] = None,
    user: Optional[User] = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    data = await service.get_stores_by_tag(tag)
    return render(request, "tag.html", user=user, title="Tags", **data)


@router.get("/top", name="top")
async def top_stores(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
    service: StoreService = Depends(get_store_service),
):
    stores = await service.get_top_stores()
    return render(request, "top_stores.html", user=user, title="★ Top Stores!", stores=stores)


@router.get("/map", name="map")
async def map_page(request: Request, user: Optional[User] = Depends(get_current_user)):
    return render(request, "map.html", user=user, title="Map")


@router.get("/hearts", name="hearts")
async def hearted_stores(
    request: Request,
    user: User = Depends(require_user),
    service: StoreService = Depends(get_store_service),
):
    stores = await service.get_hearted_stores(user)
    return render(request, "stores.html", user=user, title="Hearted Stores", stores=stores)


@router.post("/hearts/{store_id}", response_model=HeartsResponse)
async def heart_store(
    store_id: str,
    user: User = Depends(require_user),
    service: StoreService = Depends(get_store_service),
):
    hearts = await service.toggle_heart(user, store_id)
    return {"hearts": [str(h) for h in hearts]}
