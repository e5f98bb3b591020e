"""
Record kinds served by the API.

Every kind is stored and exposed the same way; a ``ResourceKind``
only records the names used for its collection, URL and messages,
and which query routes it offers on top of the shared CRUD routes.
``SEED_RECORDS`` holds the example data loaded at startup.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class ResourceKind:
    """Describes one record kind.

    Attributes:
        name: Collection name, also the URL segment (``workouts``).
        label: Human readable name used in messages (``Workout``).
        key: Key wrapping the removed record in delete responses.
        list_all: Whether ``GET /<name>`` lists the whole collection.
        user_scoped: Whether ``GET /<name>/user/{user_id}`` is exposed.
        lookup_fields: Fields exposed as ``GET /<name>/<field>/{value}``
            single‑record lookups.
        pending_requests: Whether ``GET /<name>/pending/{user_id}`` is
            exposed (buddy connections only).
    """

    name: str
    label: str
    key: str
    list_all: bool = False
    user_scoped: bool = True
    lookup_fields: Tuple[str, ...] = ()
    pending_requests: bool = False


PROFILES = ResourceKind(
    name="profiles",
    label="Profile",
    key="profile",
    list_all=True,
    user_scoped=False,
    lookup_fields=("email", "username"),
)
WORKOUTS = ResourceKind(name="workouts", label="Workout", key="workout")
BUDDIES = ResourceKind(
    name="buddies",
    label="Buddy connection",
    key="buddy",
    pending_requests=True,
)
GOALS = ResourceKind(name="goals", label="Goal", key="goal")
ACHIEVEMENTS = ResourceKind(name="achievements", label="Achievement", key="achievement")
CHALLENGES = ResourceKind(name="challenges", label="Challenge", key="challenge", list_all=True)

RESOURCE_KINDS: Tuple[ResourceKind, ...] = (
    PROFILES,
    WORKOUTS,
    BUDDIES,
    GOALS,
    ACHIEVEMENTS,
    CHALLENGES,
)


SEED_RECORDS: Dict[str, List[Dict[str, Any]]] = {
    "profiles": [
        {
            "id": "1",
            "email": "user1@example.com",
            "username": "john_doe",
            "age": 28,
            "location": "New York",
            "goal": "Weight Loss",
            "workout": "Gym",
            "weight": 85,
            "height": 180,
            "target_weight": 75,
            "avatar_url": None,
            "latitude": 40.7128,
            "longitude": -74.0060,
        }
    ],
    "workouts": [
        {
            "id": "1",
            "user_id": "1",
            "type": "Running",
            "duration": 30,
            "distance": 5,
            "calories": 300,
            "notes": "Morning jog",
        }
    ],
}
