"""Async HTTP client for the Idea Playground API."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

import httpx
from loguru import logger

from ideas_repo.models import Idea, IdeaCreate, TitleValidation

from .cache import IdeasCache
from .config import settings


class IdeasApiError(Exception):
    """A request failed; ``status_code`` is None when no response arrived."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class IdeasClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        cache: Optional[IdeasCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.cache = cache if cache is not None else IdeasCache()
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.api_url).rstrip("/"),
            transport=transport,
            timeout=timeout if timeout is not None else settings.timeout_seconds,
        )

    async def __aenter__(self) -> "IdeasClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("{method} {path} failed: {error}", method=method, path=path, error=exc)
            raise IdeasApiError(None, f"Request to {path} failed: {exc}") from exc

        if resp.is_success:
            return resp.json()

        try:
            message = resp.json().get("error") or resp.reason_phrase
        except (ValueError, AttributeError):
            message = resp.text or resp.reason_phrase
        logger.warning(
            "{method} {path} responded {status}: {message}",
            method=method,
            path=path,
            status=resp.status_code,
            message=message,
        )
        raise IdeasApiError(resp.status_code, message)

    async def get_ideas(self, *, refresh: bool = False) -> Dict[str, Idea]:
        if self.cache.ideas is not None and not refresh:
            return dict(self.cache.ideas)
        payload = await self._request("GET", "/api/ideas")
        ideas = {
            idea_id: Idea.model_validate({**data, "id": idea_id})
            for idea_id, data in payload.get("ideas", {}).items()
        }
        self.cache.ideas = ideas
        return dict(ideas)

    async def get_dimensions(self, *, refresh: bool = False) -> Dict[str, Any]:
        if self.cache.dimensions is not None and not refresh:
            return self.cache.dimensions
        payload = await self._request("GET", "/api/dimensions")
        self.cache.dimensions = payload
        return payload

    async def get_idea(self, idea_id: str) -> Idea:
        payload = await self._request("GET", f"/api/ideas/{idea_id}")
        return Idea.model_validate(payload)

    async def create_idea(self, idea: Union[IdeaCreate, Dict[str, Any]]) -> Idea:
        body = idea.model_dump(mode="json") if isinstance(idea, IdeaCreate) else idea
        payload = await self._request("POST", "/api/ideas", json=body)
        self.cache.invalidate()
        return Idea.model_validate(payload)

    async def update_idea(self, idea_id: str, updates: Dict[str, Any]) -> Idea:
        payload = await self._request("PUT", f"/api/ideas/{idea_id}", json=updates)
        self.cache.invalidate()
        return Idea.model_validate(payload)

    async def delete_idea(self, idea_id: str) -> None:
        await self._request("DELETE", f"/api/ideas/{idea_id}")
        self.cache.invalidate()

    async def reorder_ideas(self, ordered_ids: Sequence[str]) -> None:
        await self._request("PUT", "/api/ideas/reorder", json={"reorderedIds": list(ordered_ids)})
        self.cache.invalidate()

    async def validate_title(self, title: str, exclude_id: Optional[str] = None) -> TitleValidation:
        body: Dict[str, Any] = {"title": title}
        if exclude_id:
            body["excludeId"] = exclude_id
        payload = await self._request("POST", "/api/ideas/validate-title", json=body)
        return TitleValidation.model_validate(payload)
