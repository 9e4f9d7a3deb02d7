# 테스트용 인메모리 저장소
# - 실제 저장소와 같은 메서드 이름/시그니처, MongoDB 없이 서비스 로직 검증용
# - Beanie Document 대신 SimpleNamespace를 사용 (init_beanie 없이 생성 가능)

import re
from datetime import datetime, timedelta
from types import SimpleNamespace

from bson import ObjectId


def make_user(name="Alice", email="alice@x.com", hashed_password="", **extra):
    fields = dict(
        id=ObjectId(), name=name, email=email, hashed_password=hashed_password,
        hearts=[], reset_password_token=None, reset_password_expires=None,
    )
    fields.update(extra)
    return SimpleNamespace(**fields)


class FakeUserRepository:
    def __init__(self, users=None):
        self.users = list(users or [])

    async def get_by_email(self, email):
        email = email.strip().lower()
        return next((u for u in self.users if u.email == email), None)

    async def create(self, name, email, hashed_password):
        user = make_user(name=name, email=email, hashed_password=hashed_password)
        self.users.append(user)
        return user

    async def get(self, user_id):
        return next((u for u in self.users if str(u.id) == str(user_id)), None)

    async def by_ids(self, ids):
        ids = {str(i) for i in ids}
        return [u for u in self.users if str(u.id) in ids]

    async def get_by_reset_token(self, token):
        return next((u for u in self.users if u.reset_password_token == token), None)

    async def set_reset_token(self, user, token, expires):
        user.reset_password_token = token
        user.reset_password_expires = expires
        return user

    async def set_password(self, user, hashed_password):
        user.hashed_password = hashed_password
        user.reset_password_token = None
        user.reset_password_expires = None
        return user

    async def update_account(self, user, name, email):
        user.name = name
        user.email = email
        return user

    async def toggle_heart(self, user_id, store_id, remove):
        user = await self.get(user_id)
        if remove:
            user.hearts = [h for h in user.hearts if h != store_id]
        elif store_id not in user.hearts:
            user.hearts = [*user.hearts, store_id]
        return user


class FakeStoreRepository:
    def __init__(self):
        self.stores = []
        self._clock = datetime(2024, 1, 1)

    async def get(self, store_id):
        return next((s for s in self.stores if str(s.id) == str(store_id)), None)

    async def get_by_slug(self, slug):
        return next((s for s in self.stores if s.slug == slug), None)

    async def count_slug_matches(self, pattern, exclude_id=None):
        rx = re.compile(pattern, re.IGNORECASE)
        return sum(1 for s in self.stores if rx.match(s.slug) and s.id != exclude_id)

    async def create(self, **fields):
        # 생성 순서대로 created가 증가하도록
        self._clock += timedelta(minutes=1)
        store = SimpleNamespace(id=ObjectId(), created=self._clock, **fields)
        self.stores.append(store)
        return store

    async def save(self, store):
        return store

    async def count(self):
        return len(self.stores)

    async def page(self, skip, limit):
        ordered = sorted(self.stores, key=lambda s: s.created, reverse=True)
        return ordered[skip:skip + limit]

    async def by_ids(self, ids):
        ids = {str(i) for i in ids}
        return [s for s in self.stores if str(s.id) in ids]

    async def by_tag(self, tag):
        return [s for s in self.stores if (tag in s.tags if tag else True)]

    async def tag_rows(self):
        return [{"tags": list(s.tags)} for s in self.stores]

    async def cards(self):
        return [{"_id": str(s.id), "name": s.name, "slug": s.slug, "photo": s.photo} for s in self.stores]


class FakeReviewRepository:
    def __init__(self):
        self.reviews = []

    async def create(self, author, store, text, rating):
        review = SimpleNamespace(id=ObjectId(), author=author, store=store, text=text, rating=rating,
                                 created_date=datetime.utcnow())
        self.reviews.append(review)
        return review

    async def for_store(self, store_id):
        return [r for r in self.reviews if r.store == store_id]

    async def ratings(self):
        return [{"store": str(r.store), "rating": r.rating} for r in self.reviews]


def store_values(name="Joe's Café", **overrides):
    values = {
        "name": name,
        "description": "  Good coffee  ",
        "tags": ["Wifi"],
        "address": "1 James St N, Hamilton",
        "lng": "-79.87",
        "lat": "43.25",
    }
    values.update(overrides)
    return values
