# 인증/계정 라우터 (서버 렌더링)
# - GET/POST /login, GET /logout
# - GET/POST /register            : 가입 후 바로 로그인
# - GET/POST /account             : 내 정보 수정 (로그인 필요)
# - GET/POST /account/forgot      : 재설정 링크 메일 발송
# - GET/POST /account/reset/{token}

from typing import Optional

from fastapi import APIRouter, Depends, Form, Request

from ..core.exceptions import FormValidationError
from ..core.security import get_current_user, get_session, require_user
from ..core.session import Session
from ..core.templating import redirect, redirect_back, render
from ..models.user import User
from ..services.auth_service import AuthService, get_auth_service

router = APIRouter(tags=["auth"])


@router.get("/login", name="login")
async def login_form(request: Request, user: Optional[User] = Depends(get_current_user)):
    return render(request, "login.html", user=user, title="Login")


@router.post("/login")
async def login(
    email: str = Form(""),
    password: str = Form(""),
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    user = await service.authenticate(email, password)
    session.login(user.id)
    session.flash("success", "You are now logged in!")
    return redirect("/")


@router.get("/logout", name="logout")
async def logout(session: Session = Depends(get_session)):
    session.logout()
    session.flash("success", "You are now logged out! 👋")
    return redirect("/")


@router.get("/register", name="register")
async def register_form(request: Request, user: Optional[User] = Depends(get_current_user)):
    return render(request, "register.html", user=user, title="Register", body={})


@router.post("/register")
async def register(
    request: Request,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    form = await request.form()
    values = {
        "name": form.get("name", ""),
        "email": form.get("email", ""),
        "password": form.get("password", ""),
        "password_confirm": form.get("password-confirm", ""),
    }
    try:
        user = await service.register(values)
    except FormValidationError as e:
        for message in e.messages:
            session.flash("error", message)
        # 비밀번호는 다시 채워주지 않음
        body = {"name": values["name"], "email": values["email"]}
        return render(request, "register.html", title="Register", body=body)
    session.login(user.id)
    session.flash("success", "You are now logged in!")
    return redirect("/")


@router.get("/account", name="account")
async def account(request: Request, user: User = Depends(require_user)):
    return render(request, "account.html", user=user, title="Edit Your Account")


@router.post("/account")
async def update_account(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    user: User = Depends(require_user),
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    await service.update_account(user, {"name": name, "email": email})
    session.flash("success", "Updated the profile!")
    return redirect_back(request, fallback="/account")


@router.get("/account/forgot", name="forgot")
async def forgot_form(request: Request, user: Optional[User] = Depends(get_current_user)):
    return render(request, "forgot.html", user=user, title="Forgot Password")


@router.post("/account/forgot")
async def forgot(
    request: Request,
    email: str = Form(""),
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    await service.forgot(email, lambda token: str(request.url_for("reset_form", token=token)))
    session.flash("success", "You have been emailed a password reset link.")
    return redirect("/login")


@router.get("/account/reset/{token}", name="reset_form")
async def reset_form(request: Request, token: str, service: AuthService = Depends(get_auth_service)):
    await service.get_reset_user(token)
    return render(request, "reset.html", title="Reset your Password", token=token)


@router.post("/account/reset/{token}")
async def reset(
    token: str,
    password: str = Form(""),
    password_confirm: str = Form("", alias="password-confirm"),
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    user = await service.reset_password(token, password, password_confirm)
    session.login(user.id)
    session.flash("success", "💃 Nice! Your password has been reset! You are now logged in!")
    return redirect("/")
