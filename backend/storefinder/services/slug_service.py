# 슬러그(slug) 생성 서비스
# - 스토어 이름 -> 소문자, 하이픈 구분, URL-safe 문자열
# - 같은 기본 슬러그가 이미 n개 있으면 "base-(n+1)"
#
# 주의: 개수 조회와 저장이 별도 연산이라 원자적이지 않습니다.
# 같은 이름의 스토어가 동시에 생성되면 같은 슬러그가 나올 수 있습니다.

import logging
import re
from typing import Optional

from beanie import PydanticObjectId
from slugify import slugify

from ..repositories.store_repository import StoreRepository

logger = logging.getLogger(__name__)

# 아포스트로피는 구분자가 아니라 삭제 ("Joe's" -> "joes")
_REPLACEMENTS = [["'", ""], ["’", ""]]


def base_slug(name: str) -> str:
    return slugify(name, replacements=_REPLACEMENTS)


def slug_pattern(base: str) -> str:
    return rf"^({re.escape(base)})((-[0-9]+)?)$"


def next_slug(base: str, existing: int) -> str:
    if existing == 0:
        return base
    return f"{base}-{existing + 1}"


async def assign_slug(name: str, repo: StoreRepository, exclude_id: Optional[PydanticObjectId] = None) -> str:
    """
    스토어 이름에서 중복되지 않는 슬러그를 만듭니다.

    Args:
        name: 스토어 이름
        repo: 기존 슬러그 개수를 세는 저장소
        exclude_id: 이름을 바꾸는 스토어 자신의 ID (자기 자신은 개수에서 제외)

    Returns:
        str: 할당할 슬러그
    """
    base = base_slug(name)
    existing = await repo.count_slug_matches(slug_pattern(base), exclude_id=exclude_id)
    slug = next_slug(base, existing)
    logger.info(f"[SlugService] '{name}' -> '{slug}' (기존 {existing}개)")
    return slug
