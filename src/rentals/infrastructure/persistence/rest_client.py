"""Thin client for the hosted database's REST interface (PostgREST dialect).

Every table is exposed under ``/rest/v1/<table>``; rows are filtered
with query parameters such as ``fecha_evento=eq.2025-06-01``. Transport
failures and error responses surface as BackendError.
"""

from __future__ import annotations

import logging

import httpx

from rentals.domain.exceptions import BackendError

logger = logging.getLogger(__name__)

Params = list[tuple[str, str]]


class RestClient:

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    def select(self, table: str, params: Params | None = None) -> list[dict]:
        query = list(params or [])
        if not any(key == "select" for key, _ in query):
            query.append(("select", "*"))
        return self._request("GET", table, params=query)

    def insert(self, table: str, rows: list[dict]) -> list[dict]:
        """Insert rows and return them as stored (with generated IDs)."""
        if not rows:
            return []
        return self._request(
            "POST",
            table,
            json=rows,
            headers={"Prefer": "return=representation"},
        )

    def update(self, table: str, values: dict, params: Params) -> None:
        self._request("PATCH", table, json=values, params=params)

    def delete(self, table: str, params: Params) -> None:
        self._request("DELETE", table, params=params)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, table: str, **kwargs) -> list[dict]:
        try:
            response = self._client.request(method, f"/{table}", **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "%s %s failed with HTTP %d: %s",
                method,
                table,
                exc.response.status_code,
                exc.response.text,
            )
            raise BackendError(
                f"Backend rejected {method} {table} (HTTP {exc.response.status_code})"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, table, exc)
            raise BackendError(f"Backend unreachable: {exc}") from exc

        if not response.content:
            return []
        return response.json()


def eq(column: str, value) -> tuple[str, str]:
    return column, f"eq.{value}"


def in_(column: str, values) -> tuple[str, str]:
    return column, f"in.({','.join(str(v) for v in values)})"


def not_in(column: str, values) -> tuple[str, str]:
    return column, f"not.in.({','.join(str(v) for v in values)})"


def gte(column: str, value) -> tuple[str, str]:
    return column, f"gte.{value}"


def lte(column: str, value) -> tuple[str, str]:
    return column, f"lte.{value}"


def ilike(column: str, value: str) -> tuple[str, str]:
    return column, f"ilike.{value}"
