"""FitnessBuddy API client.

This module defines a thin client wrapper around the FitnessBuddy REST
API.  The client uses the ``requests`` library internally to make HTTP
calls and presents one contract to its callers: a successful call
returns the parsed JSON body, a failed call raises :class:`ApiError`.

The client exposes one convenience API per record kind:

* :attr:`FitnessBuddyAPI.profiles` – profiles, with lookup by email
  and username.
* :attr:`FitnessBuddyAPI.workouts` – workouts for a user.
* :attr:`FitnessBuddyAPI.buddies` – buddy connections and pending
  requests.
* :attr:`FitnessBuddyAPI.goals` – goals for a user.
* :attr:`FitnessBuddyAPI.achievements` – achievements for a user.
* :attr:`FitnessBuddyAPI.challenges` – all challenges or a user's.

These only bind arguments onto :meth:`FitnessBuddyAPI.get`,
:meth:`~FitnessBuddyAPI.post`, :meth:`~FitnessBuddyAPI.put` and
:meth:`~FitnessBuddyAPI.delete`.

The base URL defaults to the ``FITNESS_BUDDY_API_BASE_URL`` environment
variable, falling back to ``http://localhost:5000/api``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 15.0


class ApiError(Exception):
    """Raised for every failed API call.

    Attributes:
        message: Best available description of the failure: the
            server's ``message``, the HTTP reason phrase, or the
            transport error.
        status_code: HTTP status of the response, or ``None`` when no
            response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FitnessBuddyAPI:
    """Client for interacting with the FitnessBuddy API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API including the ``/api`` prefix.
                Defaults to ``FITNESS_BUDDY_API_BASE_URL`` or
                ``http://localhost:5000/api``.
            timeout: Per‑request timeout in seconds.  Defaults to
                ``FITNESS_BUDDY_API_TIMEOUT`` or 15 seconds.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        base_url = base_url or os.getenv("FITNESS_BUDDY_API_BASE_URL") or DEFAULT_BASE_URL
        self.base_url = base_url.rstrip("/")
        if timeout is None:
            timeout = float(os.getenv("FITNESS_BUDDY_API_TIMEOUT", DEFAULT_TIMEOUT))
        self.timeout = timeout
        self.session = session or requests.Session()

        self.profiles = ProfileAPI(self)
        self.workouts = WorkoutAPI(self)
        self.buddies = BuddyAPI(self)
        self.goals = GoalAPI(self)
        self.achievements = AchievementAPI(self)
        self.challenges = ChallengeAPI(self)

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def request(
        self,
        endpoint: str,
        method: str = "GET",
        *,
        json_body: Any | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Any:
        """Perform an HTTP request to the API and return the JSON body.

        Args:
            endpoint: Path relative to :attr:`base_url` (e.g. ``/profiles``).
            method: HTTP method, ``GET`` by default.
            json_body: JSON body to send with the request (for POST/PUT).
            headers: Extra headers, merged over the JSON content type.
        Raises:
            ApiError: On a non‑success status, a transport failure or a
                response body that is not valid JSON.
        """
        url = f"{self.base_url}{endpoint}"
        request_headers = {"Content-Type": "application/json"}
        request_headers.update(headers or {})
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=request_headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API call error (%s): %s", endpoint, exc)
            raise ApiError(str(exc) or "Network error") from exc

        if not response.ok:
            message = self._error_message(response)
            logger.error("API call error (%s): %s %s", endpoint, response.status_code, message)
            raise ApiError(message, response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("API call error (%s): invalid JSON in response", endpoint)
            raise ApiError(f"Invalid JSON in response from {endpoint}", response.status_code) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Extract the error message from a failed response.

        The server reports errors as ``{"message": ...}``; FastAPI's own
        errors use ``detail``.  Bodies that are not JSON fall back to the
        HTTP reason phrase.
        """
        message: Any = None
        try:
            body = response.json()
        except ValueError:
            message = response.reason
        else:
            if isinstance(body, dict):
                message = body.get("message") or body.get("detail")
        if not message:
            return f"API Error: {response.status_code}"
        return message if isinstance(message, str) else str(message)

    def get(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request(endpoint, "GET", **kwargs)

    def post(self, endpoint: str, data: Any, **kwargs: Any) -> Any:
        return self.request(endpoint, "POST", json_body=data, **kwargs)

    def put(self, endpoint: str, data: Any, **kwargs: Any) -> Any:
        return self.request(endpoint, "PUT", json_body=data, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> Any:
        return self.request(endpoint, "DELETE", **kwargs)


class _ResourceAPI:
    """CRUD calls shared by every record kind."""

    collection = ""

    def __init__(self, api: FitnessBuddyAPI) -> None:
        self.api = api

    def _path(self, *segments: Any) -> str:
        parts = [self.collection] + [quote(str(segment), safe="") for segment in segments]
        return "/" + "/".join(parts)

    def get_by_id(self, record_id: Any) -> Dict[str, Any]:
        return self.api.get(self._path(record_id))

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.post(self._path(), data)

    def update(self, record_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.api.put(self._path(record_id), data)

    def delete(self, record_id: Any) -> Dict[str, Any]:
        return self.api.delete(self._path(record_id))


class ProfileAPI(_ResourceAPI):
    collection = "profiles"

    def get_all(self) -> List[Dict[str, Any]]:
        return self.api.get(self._path())

    def get_by_email(self, email: str) -> Dict[str, Any]:
        return self.api.get(self._path("email", email))

    def get_by_username(self, username: str) -> Dict[str, Any]:
        return self.api.get(self._path("username", username))


class WorkoutAPI(_ResourceAPI):
    collection = "workouts"

    def get_user_workouts(self, user_id: Any) -> List[Dict[str, Any]]:
        return self.api.get(self._path("user", user_id))


class BuddyAPI(_ResourceAPI):
    collection = "buddies"

    def get_user_buddies(self, user_id: Any) -> List[Dict[str, Any]]:
        return self.api.get(self._path("user", user_id))

    def get_pending(self, user_id: Any) -> List[Dict[str, Any]]:
        """Pending requests sent or received by ``user_id``."""
        return self.api.get(self._path("pending", user_id))


class GoalAPI(_ResourceAPI):
    collection = "goals"

    def get_user_goals(self, user_id: Any) -> List[Dict[str, Any]]:
        return self.api.get(self._path("user", user_id))


class AchievementAPI(_ResourceAPI):
    collection = "achievements"

    def get_user_achievements(self, user_id: Any) -> List[Dict[str, Any]]:
        return self.api.get(self._path("user", user_id))


class ChallengeAPI(_ResourceAPI):
    collection = "challenges"

    def get_all(self) -> List[Dict[str, Any]]:
        return self.api.get(self._path())

    def get_user_challenges(self, user_id: Any) -> List[Dict[str, Any]]:
        return self.api.get(self._path("user", user_id))
