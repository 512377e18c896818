"""
기본 카테고리 목록 (SPA와 공유)

카테고리는 자유 입력이지만, 화면에서 아이콘/색상을 맞추기 위해
자주 쓰는 항목을 미리 정의해 둡니다.
"""

DEFAULT_CATEGORIES = {
    'Food': {'icon': '🍔', 'color': '#EF4444', 'type': 'expense'},
    'Salary': {'icon': '💰', 'color': '#10B981', 'type': 'income'},
    'Travel': {'icon': '✈️', 'color': '#3B82F6', 'type': 'expense'},
    'Shopping': {'icon': '🛍️', 'color': '#EC4899', 'type': 'expense'},
    'Investment': {'icon': '📈', 'color': '#6366F1', 'type': 'income'},
    'Freelance': {'icon': '🧑‍💻', 'color': '#10B981', 'type': 'income'},
    'Bills': {'icon': '💡', 'color': '#F59E0B', 'type': 'expense'},
    'Other': {'icon': '📦', 'color': '#6B7280', 'type': None},
    'Entertainment': {'icon': '🎬', 'color': '#EC4899', 'type': 'expense'},
    'Health': {'icon': '💊', 'color': '#EF4444', 'type': 'expense'},
    'Education': {'icon': '🎓', 'color': '#06B6D4', 'type': 'expense'},
    'Transfer': {'icon': '🔁', 'color': '#9CA3AF', 'type': None},
}

FALLBACK_CATEGORY = {'icon': '📂', 'color': '#9CA3AF', 'type': None}


def get_category(name):
    """이름으로 카테고리 정보 조회 (대소문자 무시, 없으면 기본값)"""
    if not name:
        return FALLBACK_CATEGORY
    if name in DEFAULT_CATEGORIES:
        return DEFAULT_CATEGORIES[name]
    lowered = str(name).lower()
    for key, value in DEFAULT_CATEGORIES.items():
        if key.lower() == lowered:
            return value
    return FALLBACK_CATEGORY


def is_default_category(name):
    return get_category(name) is not FALLBACK_CATEGORY
