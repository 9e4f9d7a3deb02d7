# 커스텀 예외 클래스 정의
# 주니어 개발자님께: 서비스 레이어는 HTTP를 모릅니다.
# 여기 정의된 예외를 던지면 main.py에 등록된 핸들러가
# 알림(flash) + 리다이렉트 또는 에러 페이지로 바꿔 줍니다.

from typing import Dict, List, Optional


class StoreFinderError(Exception):
    """storefinder 도메인 예외의 기본 클래스"""
    pass


class FormValidationError(StoreFinderError):
    """폼 입력 검증 실패

    폼을 다시 렌더링할 때 사용자가 입력한 값을 보존해야 하므로
    메시지와 함께 제출된 값도 들고 다닙니다.

    Attributes:
        messages: 사용자에게 보여줄 필드별 메시지 목록
        values: 사용자가 제출한 원래 값
    """
    def __init__(self, messages: List[str], values: Optional[Dict] = None):
        self.messages = messages
        self.values = values or {}
        super().__init__("; ".join(messages))


class AuthenticationError(StoreFinderError):
    """이메일/비밀번호 검증 실패 (원인은 노출하지 않음)"""
    def __init__(self, message: str = "Failed login!"):
        self.message = message
        super().__init__(message)


class LoginRequired(StoreFinderError):
    """로그인이 필요한 라우트에 익명 사용자가 접근한 경우"""
    def __init__(self, message: str = "Oops you must be logged in to do that!"):
        self.message = message
        super().__init__(message)


class NotStoreOwnerError(StoreFinderError):
    """스토어 소유자가 아닌 사용자가 수정하려는 경우"""
    def __init__(self, message: str = "You must own a store in order to edit it!"):
        self.message = message
        super().__init__(message)


class StoreNotFoundError(StoreFinderError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Store not found: {identifier}")


class AccountNotFound(StoreFinderError):
    def __init__(self, message: str = "No account with that email exists"):
        self.message = message
        super().__init__(message)


class InvalidResetToken(StoreFinderError):
    """비밀번호 재설정 토큰이 없거나 만료된 경우

    주니어 개발자님께: 토큰이 틀린 경우와 만료된 경우를 구분하지 않습니다.
    구분해서 알려주면 공격자가 유효한 토큰을 추측하는 데 힌트가 됩니다.
    """
    def __init__(self, message: str = "Password reset is invalid or has expired"):
        self.message = message
        super().__init__(message)
