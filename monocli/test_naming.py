import datetime

from monocli.naming import best_suggestion, is_valid_name, suggest_names


def test_is_valid_name():
    assert is_valid_name("shop")
    assert is_valid_name("shop-api-2")
    assert not is_valid_name("Shop")
    assert not is_valid_name("shop--api")
    assert not is_valid_name("-shop")


def test_suggestions_skip_taken_and_cap_at_five():
    taken = {"shop-app", "shop-dev"}
    suggestions = suggest_names("shop", "workspace", lambda n: n not in taken)
    assert suggestions[:3] == ["shop-workspace", "shop-kit", "shop-core"]
    assert len(suggestions) == 5
    assert not taken & set(suggestions)


def test_suggestions_fall_back_to_year_and_prefix():
    today = datetime.date(2026, 1, 1)
    allowed = {"shop-2026", "my-shop"}
    assert suggest_names("shop", "app", lambda n: n in allowed, today=today) == ["shop-2026", "my-shop"]


def test_best_suggestion():
    assert best_suggestion([]) is None
    assert best_suggestion(["shop-a1f", "shop-kit", "my-shop"]) == "shop-kit"
