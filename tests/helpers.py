BASE_URL = "https://api.github.test"


def github_user(user_id, login=None):
    login = login or f"user{user_id}"
    return {
        "login": login,
        "id": user_id,
        "avatar_url": f"https://avatars.test/{login}",
        "followers_url": f"{BASE_URL}/users/{login}/followers",
        "type": "User",
        "site_admin": False,
    }


def link_to_last(path, page):
    return (
        f'<{BASE_URL}{path}?per_page=1&page=2>; rel="next", '
        f'<{BASE_URL}{path}?per_page=1&page={page}>; rel="last"'
    )


def commit_items(count, prefix="commit"):
    return [{"commit": {"message": f"{prefix} {i}"}} for i in range(count)]


def contributor_weeks(*additions):
    return [{"w": 1500000000 + i * 604800, "a": a, "d": 0, "c": 1} for i, a in enumerate(additions)]
