"""
CRUD endpoints shared by every record kind.

``build_record_router`` turns a ``ResourceKind`` into an ``APIRouter``
with the collection routes, the kind's query routes and the id
routes.  Starlette matches routes in registration order, so the
factory always registers the literal‑segment routes (``/user/...``,
``/email/...``, ``/pending/...``) before ``/{record_id}``; otherwise a
request such as ``GET /profiles/email`` would be served as a lookup
of a profile whose id is ``"email"``.

Request bodies are taken verbatim as JSON objects; bodies sent with
another content type are ignored and count as ``{}``.  A missing
``record_id`` raises ``RecordNotFound`` in the store, which the
application turns into a 404 ``{"message": "<Kind> not found"}``.
"""

import json
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from fitness_buddy_api.app.core.resources import ResourceKind
from fitness_buddy_api.app.core.store import ResourceStore
from fitness_buddy_api.app.schemas.common import MessageRead

NOT_FOUND_RESPONSE = {404: {"model": MessageRead}}


def get_store(request: Request) -> ResourceStore:
    """Return the store owned by the running application."""
    return request.app.state.store


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def get_payload(request: Request) -> Dict[str, Any]:
    """Return the request body as a field mapping.

    Bodies sent without a JSON content type, and empty bodies, are
    treated as ``{}``.  A JSON body that does not parse, or is not an
    object, is rejected with 400.
    """
    if not _is_json(request.headers.get("content-type", "")):
        return {}
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body")
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be a JSON object",
        )
    return payload


def build_record_router(kind: ResourceKind) -> APIRouter:
    """Create the router for one record kind, mounted under ``/<kind.name>``."""
    router = APIRouter(prefix=f"/{kind.name}", tags=[kind.name])

    _add_collection_routes(router, kind)
    if kind.user_scoped:
        _add_user_scoped_route(router, kind)
    for field in kind.lookup_fields:
        _add_lookup_route(router, kind, field)
    if kind.pending_requests:
        _add_pending_route(router, kind)
    # Must stay last: ``/{record_id}`` matches any single segment.
    _add_id_routes(router, kind)
    return router


def _add_collection_routes(router: APIRouter, kind: ResourceKind) -> None:
    if kind.list_all:

        @router.get("", response_model=List[Dict[str, Any]], name=f"list_{kind.name}")
        async def list_records(store: ResourceStore = Depends(get_store)) -> List[Dict[str, Any]]:
            """Return every record of this kind in insertion order."""
            return store.get_all(kind.name)

    @router.post(
        "",
        response_model=Dict[str, Any],
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.key}",
    )
    async def create_record(
        payload: Dict[str, Any] = Depends(get_payload),
        store: ResourceStore = Depends(get_store),
    ) -> Dict[str, Any]:
        """Store a new record and return it with its generated ``id``."""
        return store.insert(kind.name, payload)


def _add_user_scoped_route(router: APIRouter, kind: ResourceKind) -> None:
    @router.get("/user/{user_id}", response_model=List[Dict[str, Any]], name=f"list_user_{kind.name}")
    async def list_user_records(
        user_id: str, store: ResourceStore = Depends(get_store)
    ) -> List[Dict[str, Any]]:
        """Return the records whose ``user_id`` matches; empty if none do."""
        return store.filter_by(kind.name, "user_id", user_id)


def _add_lookup_route(router: APIRouter, kind: ResourceKind, field: str) -> None:
    @router.get(
        f"/{field}/{{value}}",
        response_model=Dict[str, Any],
        responses=NOT_FOUND_RESPONSE,
        name=f"get_{kind.key}_by_{field}",
    )
    async def get_record_by_field(
        value: str, store: ResourceStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return store.find_by(kind.name, field, value)


def _add_pending_route(router: APIRouter, kind: ResourceKind) -> None:
    @router.get("/pending/{user_id}", response_model=List[Dict[str, Any]], name=f"list_pending_{kind.name}")
    async def list_pending_requests(
        user_id: str, store: ResourceStore = Depends(get_store)
    ) -> List[Dict[str, Any]]:
        """Return pending connections where the user is either party."""
        return store.pending_for(kind.name, user_id)


def _add_id_routes(router: APIRouter, kind: ResourceKind) -> None:
    @router.get(
        "/{record_id}",
        response_model=Dict[str, Any],
        responses=NOT_FOUND_RESPONSE,
        name=f"get_{kind.key}",
    )
    async def get_record(record_id: str, store: ResourceStore = Depends(get_store)) -> Dict[str, Any]:
        return store.get(kind.name, record_id)

    @router.put(
        "/{record_id}",
        response_model=Dict[str, Any],
        responses=NOT_FOUND_RESPONSE,
        name=f"update_{kind.key}",
    )
    async def update_record(
        record_id: str,
        payload: Dict[str, Any] = Depends(get_payload),
        store: ResourceStore = Depends(get_store),
    ) -> Dict[str, Any]:
        """Merge the supplied fields into the record; other fields are kept."""
        return store.update(kind.name, record_id, payload)

    @router.delete(
        "/{record_id}",
        response_model=Dict[str, Any],
        responses=NOT_FOUND_RESPONSE,
        name=f"delete_{kind.key}",
    )
    async def delete_record(record_id: str, store: ResourceStore = Depends(get_store)) -> Dict[str, Any]:
        """Remove the record and echo it back under the kind's key."""
        removed = store.delete(kind.name, record_id)
        return {"message": f"{kind.label} deleted", kind.key: removed}
