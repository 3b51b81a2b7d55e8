"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from shoplist.api.dependencies import get_current_caller, get_list_service
from shoplist.schemas.shopping_list import (
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListUpdate,
)
from shoplist.services.access import Caller
from shoplist.services.list_service import ShoppingListService

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])

CallerDep = Annotated[Caller | None, Depends(get_current_caller)]
ServiceDep = Annotated[ShoppingListService, Depends(get_list_service)]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="List not found")


@router.get("", response_model=list[ShoppingListResponse])
def get_lists(caller: CallerDep, service: ServiceDep):
    """Get the caller's lists (every list for superusers)."""
    return service.get_all(caller)


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
def create_list(list_data: ShoppingListCreate, caller: CallerDep, service: ServiceDep):
    """Create a list owned by the caller from dishes and manual items."""
    return service.create(list_data, caller)


@router.get("/{list_id}", response_model=ShoppingListResponse)
def get_list(list_id: str, caller: CallerDep, service: ServiceDep):
    """Get a specific list."""
    list_obj = service.get_by_id(list_id, caller)
    if list_obj is None:
        raise _not_found()
    return list_obj


@router.put("/{list_id}", response_model=ShoppingListResponse)
def update_list(
    list_id: str, list_data: ShoppingListUpdate, caller: CallerDep, service: ServiceDep
):
    """Update a list and re-materialize its items."""
    list_obj = service.update(list_id, list_data, caller)
    if list_obj is None:
        raise _not_found()
    return list_obj


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(list_id: str, caller: CallerDep, service: ServiceDep):
    """Delete a list."""
    if not service.delete(list_id, caller):
        raise _not_found()


@router.post("/{list_id}/items/{ingredient_id}/check", response_model=ShoppingListResponse)
def check_item(list_id: str, ingredient_id: str, caller: CallerDep, service: ServiceDep):
    """Mark an item as checked."""
    list_obj = service.set_item_checked(list_id, ingredient_id, True, caller)
    if list_obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return list_obj


@router.post("/{list_id}/items/{ingredient_id}/uncheck", response_model=ShoppingListResponse)
def uncheck_item(list_id: str, ingredient_id: str, caller: CallerDep, service: ServiceDep):
    """Mark an item as not checked."""
    list_obj = service.set_item_checked(list_id, ingredient_id, False, caller)
    if list_obj is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return list_obj
