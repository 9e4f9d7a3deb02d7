# 폼 검증 유틸리티
# - Pydantic ValidationError를 사용자에게 보여줄 메시지 목록으로 변환
# - 실패 시 FormValidationError(제출값 포함)를 던짐

from typing import Dict, List, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .exceptions import FormValidationError

FormT = TypeVar("FormT", bound=BaseModel)


def error_messages(exc: ValidationError, messages: Mapping[str, str]) -> List[str]:
    out: List[str] = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else ""
        msg = messages.get(field)
        if msg is None:
            # model_validator에서 올라온 ValueError는 "Value error, " 접두어가 붙어 있음
            msg = err["msg"].removeprefix("Value error, ")
        if msg not in out:
            out.append(msg)
    return out


def parse_form(model: Type[FormT], values: Dict, messages: Mapping[str, str]) -> FormT:
    try:
        return model(**values)
    except ValidationError as e:
        raise FormValidationError(error_messages(e, messages), values)
