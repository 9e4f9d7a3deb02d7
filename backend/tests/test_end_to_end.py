# 가입 -> 스토어 2개 생성 -> 리뷰 -> Top 스토어 흐름 검증 (인메모리 저장소)
import asyncio

from fakes import FakeReviewRepository, FakeStoreRepository, FakeUserRepository, store_values
from storefinder.services.auth_service import AuthService
from storefinder.services.review_service import ReviewService
from storefinder.services.store_service import StoreService


def test_register_create_review_and_rank():
    users = FakeUserRepository()
    stores = FakeStoreRepository()
    reviews = FakeReviewRepository()
    auth = AuthService(users)
    store_service = StoreService(stores, users, reviews)
    review_service = ReviewService(reviews, stores)

    async def scenario():
        alice = await auth.register(
            {"name": "Alice", "email": "alice@example.com", "password": "pw", "password_confirm": "pw"}
        )
        bob = await auth.register(
            {"name": "Bob", "email": "bob@example.com", "password": "pw", "password_confirm": "pw"}
        )
        first = await store_service.create_store(store_values(), None, alice)
        second = await store_service.create_store(store_values(), None, alice)

        await review_service.add_review(str(first.id), {"text": "Good", "rating": "4"}, alice)
        await review_service.add_review(str(first.id), {"text": "Great", "rating": "5"}, bob)
        await review_service.add_review(str(second.id), {"text": "Only one", "rating": "5"}, bob)

        await store_service.toggle_heart(bob, str(second.id))
        return first, second, bob, await store_service.get_top_stores(), await store_service.get_hearted_stores(bob)

    first, second, bob, top, hearted = asyncio.run(scenario())

    assert (first.slug, second.slug) == ("joes-cafe", "joes-cafe-2")
    assert len(top) == 1
    assert top[0].slug == "joes-cafe"
    assert top[0].averageRating == 4.5
    assert top[0].reviewCount == 2
    assert hearted == [second]
