from github_user_stats.models import FollowersRecord, StatisticsRecord, UserRecord

from tests.helpers import github_user


def test_user_record_keeps_identity_fields_only():
    record = UserRecord.from_github_entry(github_user(7, "octocat"))
    assert record.to_dict() == {"login": "octocat", "avatar_url": "https://avatars.test/octocat", "id": 7}


def test_followers_record_from_user():
    user = UserRecord("octocat", "https://avatars.test/octocat", 7)
    assert FollowersRecord.from_user(user, 12).to_dict() == {
        "login": "octocat",
        "avatar_url": "https://avatars.test/octocat",
        "id": 7,
        "nb_followers": 12,
    }


def test_statistics_record_defaults_to_zero():
    record = StatisticsRecord("octocat", "https://avatars.test/octocat")
    assert record.to_dict() == {
        "username": "octocat",
        "avatar_url": "https://avatars.test/octocat",
        "nb_lines": 0,
        "nb_commit": 0,
        "nb_repos": 0,
    }


def test_user_record_tolerates_missing_fields():
    entry = github_user(7, "octocat")
    del entry["avatar_url"]
    assert UserRecord.from_github_entry(entry) == UserRecord("octocat", None, 7)
