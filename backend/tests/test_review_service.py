# 리뷰 서비스 검증
import asyncio

import pytest

from fakes import FakeReviewRepository, FakeStoreRepository, make_user, store_values
from storefinder.core.exceptions import FormValidationError, StoreNotFoundError
from storefinder.services.review_service import ReviewService


def _setup():
    stores = FakeStoreRepository()
    user = make_user()
    store = asyncio.run(stores.create(name="Joe's Café", slug="joes-cafe", author=user.id))
    return ReviewService(FakeReviewRepository(), stores), store, user


def test_add_review():
    service, store, user = _setup()
    review = asyncio.run(service.add_review(str(store.id), {"text": "  Great  ", "rating": "5"}, user))
    assert review.text == "Great"
    assert review.rating == 5
    assert review.store == store.id
    assert review.author == user.id


def test_same_user_can_review_twice():
    service, store, user = _setup()
    asyncio.run(service.add_review(str(store.id), {"text": "ok", "rating": "3"}, user))
    asyncio.run(service.add_review(str(store.id), {"text": "better", "rating": "4"}, user))
    assert len(service.reviews.reviews) == 2


@pytest.mark.parametrize("values, message", [
    ({"text": "", "rating": "3"}, "Your review must have text!"),
    ({"text": "fine", "rating": "0"}, "You must include a rating between 1 and 5!"),
    ({"text": "fine", "rating": "6"}, "You must include a rating between 1 and 5!"),
    ({"text": "fine"}, "You must include a rating between 1 and 5!"),
])
def test_invalid_review(values, message):
    service, store, user = _setup()
    with pytest.raises(FormValidationError) as exc:
        asyncio.run(service.add_review(str(store.id), values, user))
    assert exc.value.messages == [message]
    assert service.reviews.reviews == []


def test_review_for_missing_store():
    service, _, user = _setup()
    with pytest.raises(StoreNotFoundError):
        asyncio.run(service.add_review("5f0000000000000000000000", {"text": "x", "rating": "3"}, user))
