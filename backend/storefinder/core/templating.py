# Jinja2 템플릿 설정
# - 레이아웃에서 쓰는 전역 값(사이트 이름, 메뉴, 지도 키)과 필터 등록
# - render(): 세션의 플래시 메시지를 꺼내 컨텍스트에 넣고 렌더링

from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.requests import Request

from .config import PACKAGE_ROOT, settings
from .constants import MENU, SITE_NAME, TAG_CHOICES

templates = Jinja2Templates(directory=str(PACKAGE_ROOT / "templates"))


def static_map(location, width: int = 800, height: int = 150, zoom: int = 14) -> str:
    lng, lat = location.coordinates
    query = urlencode({
        "center": f"{lat},{lng}",
        "zoom": zoom,
        "size": f"{width}x{height}",
        "key": settings.MAP_KEY or "",
        "markers": f"{lat},{lng}",
        "scale": 2,
    })
    return f"https://maps.googleapis.com/maps/api/staticmap?{query}"


def photo_url(filename: Optional[str]) -> str:
    return f"/uploads/{filename}" if filename else "/static/images/store.svg"


def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%b %d, %Y") if value else ""


templates.env.globals.update(
    site_name=SITE_NAME,
    menu=MENU,
    tag_choices=TAG_CHOICES,
    map_key=settings.MAP_KEY,
)
templates.env.filters["static_map"] = static_map
templates.env.filters["date"] = format_date
templates.env.filters["photo_url"] = photo_url


def render(request: Request, name: str, user=None, status_code: int = 200, **context):
    session = getattr(request.state, "session", None)
    flashes = session.pop_flashes() if session is not None else {}
    ctx = {"user": user, "flashes": flashes, "current_path": request.url.path, **context}
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def redirect_back(request: Request, fallback: str = "/") -> RedirectResponse:
    return redirect(request.headers.get("referer") or fallback)
