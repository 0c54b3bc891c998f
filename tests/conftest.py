"""In-memory stand-ins for the repositories, shared by the service tests."""

import itertools
from types import SimpleNamespace

import pytest

from database.exceptions import IntegrityError, NotFoundError, RoundLockedError
from models import Course, Hole, Player, Round
from notifications.push import PushDeliveryError

_ids = itertools.count(1)


def _next_id() -> str:
    return f"id-{next(_ids)}"


class FakePlayers:
    def __init__(self, players=()):
        self.players = {p.id: p for p in players}

    async def get_player(self, player_id):
        return self.players.get(player_id)

    async def get_players_by_tournament(self, tournament_id):
        return [p for p in self.players.values() if p.tournament_id == tournament_id]


class FakeNotifications:
    def __init__(self, failing=()):
        self.created = []
        self.failing = set(failing)

    async def create_notification(self, notification):
        if notification.player_id in self.failing:
            raise RuntimeError("insert failed")
        stored = notification.model_copy(update={"id": _next_id()})
        self.created.append(stored)
        return stored


class FakeSubscriptions:
    def __init__(self, subscriptions=()):
        self.subscriptions = list(subscriptions)

    async def find_for_tournament(self, tournament_id, *, user_id=None, exclude_user_id=None):
        found = [s for s in self.subscriptions if s.tournament_id == tournament_id]
        if user_id:
            return [s for s in found if s.user_id == user_id]
        if exclude_user_id:
            return [s for s in found if s.user_id != exclude_user_id]
        return found

    async def delete(self, subscription_id):
        before = len(self.subscriptions)
        self.subscriptions = [s for s in self.subscriptions if s.id != subscription_id]
        return len(self.subscriptions) < before

    async def delete_by_endpoint(self, endpoint):
        before = len(self.subscriptions)
        self.subscriptions = [s for s in self.subscriptions if s.endpoint != endpoint]
        return len(self.subscriptions) < before


class FakeTransport:
    """Records deliveries; endpoints in `refuse` answer with the given status."""

    def __init__(self, refuse=None):
        self.sent = []
        self.refuse = dict(refuse or {})

    async def send(self, subscription, payload):
        endpoint = subscription["endpoint"]
        if endpoint in self.refuse:
            raise PushDeliveryError("refused", status_code=self.refuse[endpoint])
        self.sent.append((endpoint, payload))


class FakePosts:
    def __init__(self, fail=False):
        self.posts = []
        self.fail = fail

    async def create_post(self, post):
        if self.fail:
            raise RuntimeError("insert failed")
        stored = post.model_copy(update={"id": _next_id()})
        self.posts.append(stored)
        return stored

    async def exists_with_source_key(self, tournament_id, source_key):
        return any(
            p.tournament_id == tournament_id and p.source_key == source_key
            for p in self.posts
        )


class FakeRounds:
    def __init__(self, rounds=()):
        self.rounds = {r.id: r for r in rounds}
        self.saved = 0

    async def create_round(self, round_):
        stored = round_.model_copy(update={"id": _next_id()}, deep=True)
        self.rounds[stored.id] = stored
        return stored

    async def get_round(self, round_id):
        r = self.rounds.get(round_id)
        return r.model_copy(deep=True) if r else None

    async def get_rounds_by_tournament(self, tournament_id):
        return [r.model_copy(deep=True) for r in self.rounds.values()]

    async def save_holes(self, round_):
        if round_.id not in self.rounds:
            raise NotFoundError(f"Round {round_.id} not found")
        if self.rounds[round_.id].completed:
            raise RoundLockedError(f"Round {round_.id} is complete")
        self.saved += 1
        self.rounds[round_.id] = round_.model_copy(deep=True)
        return round_


class FakeCourses:
    def __init__(self, courses=()):
        self.courses = list(courses)

    async def create_course(self, course):
        if course.tournament_id != TOURNAMENT_ID:
            raise IntegrityError(f"Tournament {course.tournament_id} does not exist")
        stored = course.model_copy(update={"id": _next_id()})
        self.courses.append(stored)
        return stored

    async def get_course(self, course_id):
        return next((c for c in self.courses if c.id == course_id), None)

    async def get_courses_by_tournament(self, tournament_id):
        return [c for c in self.courses if c.tournament_id == tournament_id]


# ================================================================
# Fixtures
# ================================================================

TOURNAMENT_ID = "11111111-1111-1111-1111-111111111111"


@pytest.fixture
def players():
    return [
        Player(id="p1", tournament_id=TOURNAMENT_ID, name="Alice"),
        Player(id="p2", tournament_id=TOURNAMENT_ID, name="Bob"),
        Player(id="p3", tournament_id=TOURNAMENT_ID, name="Cara"),
    ]


@pytest.fixture
def course():
    pars = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 4, 3, 5, 4, 4, 3, 4, 5]
    return Course(
        id="c1",
        tournament_id=TOURNAMENT_ID,
        name="Kingston Heath",
        holes=[Hole(number=i + 1, par=par) for i, par in enumerate(pars)],
    )


@pytest.fixture
def fake_db(players, course):
    return SimpleNamespace(
        players=FakePlayers(players),
        notifications=FakeNotifications(),
        push_subscriptions=FakeSubscriptions(),
        posts=FakePosts(),
        rounds=FakeRounds([Round(id="r1", player_id="p1", course_id="c1", day=1)]),
        courses=FakeCourses([course]),
    )
