from fastapi import Request

from .dynamo import EventStore
from .models import Event, EventPatch


async def event_body(request: Request) -> Event:
    """
    Decode the request body as an Event whatever its Content-Type.

    Clients such as `curl -d` send JSON labelled as form data; the body is
    parsed as JSON regardless. A pydantic ValidationError here is rendered
    by errors.py.
    """
    return Event.model_validate_json(await request.body())


async def event_patch_body(request: Request) -> EventPatch:
    """Decode the request body as an EventPatch whatever its Content-Type."""
    return EventPatch.model_validate_json(await request.body())


def get_store(request: Request) -> EventStore:
    """
    FastAPI dependency returning the store the app was built with.

    Under uvicorn the lifespan has already connected it. Behind Mangum the
    lifespan is off, so the first request builds it from config and keeps it
    on app.state for the life of the container.

    Usage:
        @router.get("/events")
        def list_all(store: EventStore = Depends(get_store)):
            ...
    """
    store = request.app.state.store

    if store is None:
        store = request.app.state.store = EventStore.from_config()

    return store
