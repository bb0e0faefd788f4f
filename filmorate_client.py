"""Filmorate API client.

This module defines a small client wrapper around the Filmorate REST
API.  It uses the ``requests`` library internally and exposes one
method per route:

* users: :meth:`create_user`, :meth:`update_user`, :meth:`list_users`,
  :meth:`get_user`;
* friends: :meth:`add_friend`, :meth:`remove_friend`,
  :meth:`get_friends`, :meth:`get_common_friends`;
* films: :meth:`create_film`, :meth:`update_film`, :meth:`list_films`,
  :meth:`get_film`, :meth:`get_popular_films`;
* likes: :meth:`add_like`, :meth:`remove_like`, :meth:`get_likes`;
* reference data: :meth:`list_genres`, :meth:`get_genre`,
  :meth:`list_mpa`, :meth:`get_mpa`.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with keys ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class FilmorateClient:
    """Client for interacting with the Filmorate API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8080``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds applied to every request.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/films``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``; see the module docstring.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("errorMessage") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Users and friends
    # ------------------------------------------------------------------
    def create_user(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/users", json_body=payload)

    def update_user(self, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", "/users", json_body=payload)

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/users")
        return data or [], error

    def get_user(self, user_id: int) -> Result:
        return self._request("GET", f"/users/{user_id}")

    def add_friend(self, user_id: int, friend_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("PUT", f"/users/{user_id}/friends/{friend_id}")
        return error is None, error

    def remove_friend(self, user_id: int, friend_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/users/{user_id}/friends/{friend_id}")
        return error is None, error

    def get_friends(self, user_id: int) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/users/{user_id}/friends")
        return data or [], error

    def get_common_friends(
        self, user_id: int, other_id: int
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/users/{user_id}/friends/common/{other_id}")
        return data or [], error

    # ------------------------------------------------------------------
    # Films and likes
    # ------------------------------------------------------------------
    def create_film(self, payload: Dict[str, Any]) -> Result:
        return self._request("POST", "/films", json_body=payload)

    def update_film(self, payload: Dict[str, Any]) -> Result:
        return self._request("PUT", "/films", json_body=payload)

    def list_films(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/films")
        return data or [], error

    def get_film(self, film_id: int) -> Result:
        return self._request("GET", f"/films/{film_id}")

    def get_likes(self, film_id: int) -> Tuple[List[int], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/films/{film_id}/likes")
        return data or [], error

    def get_popular_films(
        self, count: Optional[int] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        params = {"count": count} if count is not None else None
        data, error = self._request("GET", "/films/popular", params=params)
        return data or [], error

    def add_like(self, film_id: int, user_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("PUT", f"/films/{film_id}/like/{user_id}")
        return error is None, error

    def remove_like(self, film_id: int, user_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        _, error = self._request("DELETE", f"/films/{film_id}/like/{user_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------
    def list_genres(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/genres")
        return data or [], error

    def get_genre(self, genre_id: int) -> Result:
        return self._request("GET", f"/genres/{genre_id}")

    def list_mpa(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/mpa")
        return data or [], error

    def get_mpa(self, mpa_id: int) -> Result:
        return self._request("GET", f"/mpa/{mpa_id}")
