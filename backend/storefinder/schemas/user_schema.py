# 요청/응답 스키마 정의 (Pydantic 모델)

from typing import List

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


class RegisterForm(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    password_confirm: str = Field(..., min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirm:
            raise ValueError("Oops! Your passwords do not match")
        return self


class AccountForm(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class HeartsResponse(BaseModel):
    hearts: List[str]
