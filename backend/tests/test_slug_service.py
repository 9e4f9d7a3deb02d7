# 슬러그 생성 로직 검증 (저장소는 AsyncMock)
import asyncio
import re
from unittest.mock import AsyncMock

from storefinder.services.slug_service import assign_slug, base_slug, next_slug, slug_pattern


def test_base_slug_drops_apostrophes_and_accents():
    assert base_slug("Joe's Café") == "joes-cafe"
    assert base_slug("  The Big   Burger  ") == "the-big-burger"
    assert base_slug("Joe’s Place") == "joes-place"


def test_slug_pattern_matches_only_numbered_variants():
    rx = re.compile(slug_pattern("joes-cafe"), re.IGNORECASE)
    assert rx.match("joes-cafe")
    assert rx.match("joes-cafe-2")
    assert rx.match("JOES-CAFE-10")
    assert not rx.match("joes-cafe-extra")
    assert not rx.match("big-joes-cafe")


def test_slug_pattern_escapes_regex_characters():
    rx = re.compile(slug_pattern("a.b"))
    assert rx.match("a.b-3")
    assert not rx.match("axb")


def test_next_slug():
    assert next_slug("joes-cafe", 0) == "joes-cafe"
    assert next_slug("joes-cafe", 1) == "joes-cafe-2"
    assert next_slug("joes-cafe", 2) == "joes-cafe-3"


def test_assign_slug_counts_existing():
    repo = AsyncMock()
    repo.count_slug_matches.return_value = 1
    slug = asyncio.run(assign_slug("Joe's Café", repo))
    assert slug == "joes-cafe-2"
    pattern = repo.count_slug_matches.call_args.args[0]
    assert pattern == slug_pattern("joes-cafe")
    assert repo.count_slug_matches.call_args.kwargs == {"exclude_id": None}


def test_assign_slug_passes_exclude_id():
    repo = AsyncMock()
    repo.count_slug_matches.return_value = 0
    slug = asyncio.run(assign_slug("Pizza Place", repo, exclude_id="abc"))
    assert slug == "pizza-place"
    assert repo.count_slug_matches.call_args.kwargs == {"exclude_id": "abc"}
