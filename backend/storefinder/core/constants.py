# 도메인 상수
# - 환경마다 바뀌지 않는 값들 (페이지 크기, 검색 제한 등)

STORES_PER_PAGE = 4

SEARCH_RESULT_LIMIT = 5

NEAR_RESULT_LIMIT = 10
NEAR_MAX_DISTANCE_METERS = 10000

TOP_STORES_LIMIT = 10
TOP_STORES_MIN_REVIEWS = 2

RESET_TOKEN_BYTES = 20
RESET_TOKEN_TTL_SECONDS = 60 * 60

PHOTO_MAX_WIDTH = 800

TAG_CHOICES = ["Wifi", "Open Late", "Family Friendly", "Vegetarian", "Licensed"]

SITE_NAME = "Now That's Delicious!"

MENU = [
    {"slug": "/stores", "title": "Stores", "icon": "store"},
    {"slug": "/tags", "title": "Tags", "icon": "tag"},
    {"slug": "/top", "title": "Top", "icon": "top"},
    {"slug": "/add", "title": "Add", "icon": "add"},
    {"slug": "/map", "title": "Map", "icon": "map"},
]

# 로그인 세션 만료 연장 주기 (활동 중이면 하루에 한 번 expires_at 갱신)
SESSION_REFRESH_SECONDS = 24 * 60 * 60
