from fastapi import APIRouter, Depends
from typing import List

from ..context import event_body, event_patch_body, get_store
from ..dynamo import EventStore
from ..models import (
    DeleteResult,
    ErrorResponse,
    Event,
    EventPatch,
    InsertResult,
    UpdatedEvent,
)

router = APIRouter(tags=["events"], responses={500: {"model": ErrorResponse}})

# Store failures are rendered by the handlers in errors.py.


@router.post("/event", response_model=InsertResult)
def create_event(
    event: Event = Depends(event_body),
    store: EventStore = Depends(get_store),
):
    """
    Store a new event as sent.

    The caller's ID is kept verbatim; nothing stops two events sharing it.
    Returns the record identity the store assigned.
    """
    print("Starting CreateEvent...")
    return store.insert_event(event)


@router.get("/events", response_model=List[Event], response_model_exclude_none=True)
def get_all_events(store: EventStore = Depends(get_store)):
    """Every stored event, in the table's scan order."""
    return store.list_events()


@router.get("/events/{id}", response_model=Event, response_model_exclude_none=True)
def get_one_event(id: str, store: EventStore = Depends(get_store)):
    """
    First event whose ID matches.

    A missing event is reported like any other store failure (500).
    """
    print(f"Starting GetOneEvent... Event Id {id}")
    return store.find_event(id)


@router.patch(
    "/events/{id}", response_model=UpdatedEvent, response_model_exclude_none=True
)
def update_event(
    id: str,
    patch: EventPatch = Depends(event_patch_body),
    store: EventStore = Depends(get_store),
):
    """
    Overwrite Title and Description of the event with this ID, creating it
    if needed. Returns the item as it is after the write.
    """
    print(f"Starting UpdateEvent... Event Id {id}")
    return store.upsert_event(id, patch)


@router.delete("/events/{id}", response_model=DeleteResult)
def delete_event(id: str, store: EventStore = Depends(get_store)):
    """Delete the first event with this ID. Deleting nothing is not an error."""
    print(f"Starting DeleteEvent... Event Id {id}")
    return store.delete_event(id)
