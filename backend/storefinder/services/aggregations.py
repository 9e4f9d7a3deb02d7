# 집계(리포팅) 함수
# - MongoDB 파이프라인 대신 pandas로 단계를 명시적으로 표현
#   (explode -> groupby -> filter -> mean -> sort -> head)
# - 입력은 저장소에서 projection으로 읽어온 dict 목록, 부수효과 없음

from typing import Dict, Iterable, List

import pandas as pd

from ..core.constants import TOP_STORES_LIMIT, TOP_STORES_MIN_REVIEWS
from ..schemas.store_schema import TagCount, TopStore


def tag_counts(rows: Iterable[Dict]) -> List[TagCount]:
    """
    태그별 스토어 수를 계산합니다.

    주니어 개발자님께:
    1. explode: 태그가 2개인 스토어는 2개의 행으로 펼쳐집니다.
    2. groupby + size: 태그별 행 수 = 해당 태그를 가진 스토어 수
    3. 정렬: 개수 내림차순, 같은 개수면 태그 이름순 (mergesort는 안정 정렬)
    """
    df = pd.DataFrame({"tag": [list(r.get("tags") or []) for r in rows]}, columns=["tag"])
    exploded = df.explode("tag").dropna(subset=["tag"])
    if exploded.empty:
        return []
    counts = exploded.groupby("tag").size().sort_values(ascending=False, kind="mergesort")
    return [TagCount(tag=str(tag), count=int(count)) for tag, count in counts.items()]


def top_rated(
    stores: Iterable[Dict],
    reviews: Iterable[Dict],
    limit: int = TOP_STORES_LIMIT,
    min_reviews: int = TOP_STORES_MIN_REVIEWS,
) -> List[TopStore]:
    """
    리뷰가 min_reviews개 이상인 스토어를 평균 평점 내림차순으로 반환합니다.

    Args:
        stores: {"_id", "name", "slug", "photo"} 목록
        reviews: {"store", "rating"} 목록 (store는 스토어 _id 문자열)
        limit: 최대 반환 개수
        min_reviews: 최소 리뷰 수 (리뷰 1개짜리 이상치 제외)

    Returns:
        List[TopStore]
    """
    reviews_df = pd.DataFrame(list(reviews), columns=["store", "rating"])
    if reviews_df.empty:
        return []
    stats = (
        reviews_df.groupby("store")["rating"]
        .agg(averageRating="mean", reviewCount="size")
        .reset_index()
    )
    stats = stats[stats["reviewCount"] >= min_reviews]

    stores_df = pd.DataFrame(list(stores), columns=["_id", "name", "slug", "photo"])
    merged = stores_df.merge(stats, left_on="_id", right_on="store", how="inner")
    merged = merged.sort_values("averageRating", ascending=False, kind="mergesort").head(limit)

    return [
        TopStore(
            id=str(row["_id"]),
            name=row["name"],
            slug=row["slug"],
            photo=row["photo"] if isinstance(row["photo"], str) else None,
            averageRating=float(row["averageRating"]),
            reviewCount=int(row["reviewCount"]),
        )
        for row in merged.to_dict("records")
    ]
