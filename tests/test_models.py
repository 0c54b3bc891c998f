import pytest
from pydantic import ValidationError

from models import (
    NOTIFICATION_STYLES,
    BatchResult,
    Course,
    Hole,
    HoleScore,
    Message,
    Notification,
    NotificationType,
    Post,
    PushSubscription,
    Round,
    ScoringType,
    Tournament,
)


# ================================================================
# Hole / Course
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=4, stroke_index=18)
    assert h.number == 1
    assert h.par == 4

    with pytest.raises(ValidationError):
        Hole(number=1, par=7)             # par > 6

    with pytest.raises(ValidationError):
        Hole(number=19, par=4)            # hole > 18


def test_course_hole_lookup():
    holes = [Hole(number=i, par=4, stroke_index=i) for i in range(1, 19)]
    course = Course(name="Royal Melbourne", holes=holes)
    assert course.get_hole(5).number == 5
    assert course.get_hole_par(5) == 4
    assert course.get_hole(19) is None


def test_course_hole_lookup_is_by_number_not_position():
    course = Course(holes=[Hole(number=10, par=5), Hole(number=1, par=3)])
    assert course.get_hole_par(10) == 5
    assert course.get_hole_par(1) == 3
    assert course.get_hole_par(2) is None


def test_course_hole_par_unknown_when_not_set():
    course = Course(holes=[Hole(number=1, par=4), Hole(number=2)])
    assert course.get_hole_par(1) == 4
    assert course.get_hole_par(2) is None


# ================================================================
# HoleScore / Round
# ================================================================

def test_hole_score_score_types():
    assert HoleScore(hole_number=1, strokes=3).get_score_type(4) == "birdie"
    assert HoleScore(hole_number=1, strokes=2).get_score_type(4) == "eagle"
    assert HoleScore(hole_number=1, strokes=2).get_score_type(5) == "albatross"
    assert HoleScore(hole_number=1, strokes=4).get_score_type(4) == "par"
    assert HoleScore(hole_number=1, strokes=9).get_score_type(4) == "other"
    assert HoleScore(hole_number=1, strokes=4).get_score_type(None) is None


def test_hole_score_strokes_bounds():
    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, strokes=0)
    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, strokes=21)


def test_round_set_hole_score_keeps_play_order_and_totals():
    r = Round()
    r.set_hole_score(10, 4, points=2)
    r.set_hole_score(11, 5, points=1)
    r.set_hole_score(1, 3, points=3)

    assert [h.hole_number for h in r.holes] == [10, 11, 1]
    assert r.total_gross == 12
    assert r.total_points == 6


def test_round_set_hole_score_replaces_existing():
    r = Round()
    r.set_hole_score(3, 6, points=0)
    r.set_hole_score(4, 4, points=2)
    r.set_hole_score(3, 4, points=2)

    assert [h.hole_number for h in r.holes] == [3, 4]
    assert r.get_hole_score(3).strokes == 4
    assert r.total_gross == 8


# ================================================================
# Tournament
# ================================================================

def test_tournament_defaults():
    t = Tournament(name="Club Cup", code="CLUB01", password="p", admin_password="a")
    assert t.scoring_type == ScoringType.STABLEFORD
    assert t.number_of_days == 2
    assert t.has_calcutta is False
    assert t.allow_spectator_chat is True
    assert t.blur_top_5 is False


def test_tournament_scoring_type_values():
    t = Tournament(name="x", code="X", password="p", admin_password="a", scoring_type="net-score")
    assert t.scoring_type == ScoringType.NET_SCORE
    with pytest.raises(ValidationError):
        Tournament(name="x", code="X", password="p", admin_password="a", scoring_type="skins")


def test_update_field_returns_error_message():
    t = Tournament(name="x", code="X", password="p", admin_password="a")
    assert t.update_field("number_of_days", 3) is None
    assert t.number_of_days == 3
    assert t.update_field("number_of_days", 0) is not None
    assert t.number_of_days == 3


# ================================================================
# Social
# ================================================================

def test_message_length_limits():
    with pytest.raises(ValidationError):
        Message(tournament_id="t", player_id="p", player_name="Sam", message="")
    with pytest.raises(ValidationError):
        Message(tournament_id="t", player_id="p", player_name="Sam", message="x" * 2001)


def test_post_without_player_is_system_post():
    assert Post(tournament_id="t", player_name="Aussie Golf", content="hi").is_system_post
    assert not Post(tournament_id="t", player_id="p", player_name="Sam", content="hi").is_system_post


def test_every_notification_type_has_a_style():
    assert set(NOTIFICATION_STYLES) == set(NotificationType)
    n = Notification(player_id="p", tournament_id="t", type="hole-in-one", title="t", message="m")
    assert n.style.icon == "target"
    assert n.read is False


def test_notification_type_is_closed():
    with pytest.raises(ValidationError):
        Notification(player_id="p", tournament_id="t", type="party", title="t", message="m")


# ================================================================
# PushSubscription
# ================================================================

def test_push_subscription_from_browser():
    payload = {"endpoint": "https://push.example/abc", "keys": {"p256dh": "k", "auth": "a"}}
    sub = PushSubscription.from_browser(payload, user_id="u1", tournament_id="t1")
    assert sub.endpoint == "https://push.example/abc"
    assert sub.subscription["keys"]["auth"] == "a"


def test_push_subscription_requires_endpoint():
    with pytest.raises(ValidationError):
        PushSubscription.from_browser({"keys": {}})


def test_push_subscription_endpoint_must_match_payload():
    with pytest.raises(ValidationError):
        PushSubscription(endpoint="https://a", subscription={"endpoint": "https://b"})


# ================================================================
# BatchResult
# ================================================================

def test_batch_result_counts_each_item():
    result = BatchResult()
    result.record("a")
    result.record("b", ValueError("boom"))
    result.record("c")

    assert result.succeeded == 2
    assert result.failed == 1
    assert result.outcomes[1].error == "ValueError: boom"
    dumped = result.model_dump()
    assert dumped["succeeded"] == 2
    assert dumped["failed"] == 1
