# 리뷰 라우터
# - POST /reviews/{store_id} : 리뷰 작성 (로그인 필요), 작성 후 이전 페이지로

from fastapi import APIRouter, Depends, Request

from ..core.security import get_session, require_user
from ..core.session import Session
from ..core.templating import redirect_back
from ..models.user import User
from ..services.review_service import ReviewService, get_review_service

router = APIRouter(tags=["reviews"])


@router.post("/reviews/{store_id}", name="add_review")
async def add_review(
    request: Request,
    store_id: str,
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
    service: ReviewService = Depends(get_review_service),
):
    form = await request.form()
    await service.add_review(store_id, {"text": form.get("text", ""), "rating": form.get("rating", "")}, user)
    session.flash("success", "Review Saved!")
    return redirect_back(request)
