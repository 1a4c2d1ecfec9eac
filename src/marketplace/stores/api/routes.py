"""FastAPI routes for the store directory. Every route acts on the caller's own store."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.dependencies import require
from marketplace.errors import NotFoundError
from marketplace.identity.authorization import Capability, Principal
from marketplace.stores.api.schemas import (
    RegisterStoreRequest,
    StatusResponse,
    StoreIdResponse,
    StoreResponse,
    UpdateStoreRequest,
)
from marketplace.stores.management import CloseStore, RegisterStore, UpdateStore
from marketplace.stores.store import Store

router = APIRouter(prefix="/stores", tags=["stores"])

_manage_store = require(Capability.MANAGE_STORE)


def _store_response(store: Store) -> StoreResponse:
    return StoreResponse(
        store_id=str(store.id),
        owner_id=str(store.owner_id),
        name=store.name,
        nif=store.nif,
        email=store.email,
        phone=store.phone,
        iban=store.iban,
        commerce=store.commerce,
        province=store.province,
        address=store.address,
        created_at=str(store.created_at) if store.created_at else None,
    )


def _owned_store(store_id: str, owner_id: str) -> Store:
    store = current_domain.repository_for(Store).find_owned(store_id, owner_id)
    if store is None:
        raise NotFoundError(f"No store with ID {store_id}.")
    return store


@router.post("", status_code=201, response_model=StoreIdResponse)
def register_store(body: RegisterStoreRequest, principal: Principal = Depends(_manage_store)) -> StoreIdResponse:
    command = RegisterStore(
        owner_id=principal.user_id,
        name=body.name,
        nif=body.nif,
        email=body.email,
        phone=body.phone,
        iban=body.iban,
        commerce=body.commerce,
        province=body.province.value,
        address=body.address,
    )
    store_id = current_domain.process(command, asynchronous=False)
    return StoreIdResponse(store_id=store_id)


@router.get("/{store_id}", response_model=StoreResponse)
def get_store(store_id: str, principal: Principal = Depends(_manage_store)) -> StoreResponse:
    return _store_response(_owned_store(store_id, principal.user_id))


@router.patch("/{store_id}", response_model=StoreResponse)
def update_store(
    store_id: str,
    body: UpdateStoreRequest,
    principal: Principal = Depends(_manage_store),
) -> StoreResponse:
    changes = body.model_dump(exclude_none=True)
    if "province" in changes:
        changes["province"] = body.province.value

    command = UpdateStore(store_id=store_id, owner_id=principal.user_id, **changes)
    current_domain.process(command, asynchronous=False)
    return _store_response(_owned_store(store_id, principal.user_id))


@router.delete("/{store_id}", response_model=StatusResponse)
def close_store(store_id: str, principal: Principal = Depends(_manage_store)) -> StatusResponse:
    current_domain.process(CloseStore(store_id=store_id, owner_id=principal.user_id), asynchronous=False)
    return StatusResponse(status="closed")
