"""Store directory commands: register, update and close a store."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import BadRequestError, ForbiddenError, NotFoundError
from marketplace.identity.lookup import find_user
from marketplace.identity.user import Role
from marketplace.stores.store import EDITABLE_FIELDS, UNIQUE_FIELDS, Store
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Store")
class RegisterStore:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=30)
    nif = String(required=True, max_length=14)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=20)
    iban = String(required=True, max_length=23)
    commerce = String(required=True, max_length=100)
    province = String(required=True, max_length=50)
    address = String(required=True, max_length=255)


@marketplace.command(part_of="Store")
class UpdateStore:
    """Partial update; attributes left as ``None`` are not touched."""

    store_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(max_length=30)
    nif = String(max_length=14)
    email = String(max_length=254)
    phone = String(max_length=20)
    iban = String(max_length=23)
    commerce = String(max_length=100)
    province = String(max_length=50)
    address = String(max_length=255)


@marketplace.command(part_of="Store")
class CloseStore:
    store_id = Identifier(required=True)
    owner_id = Identifier(required=True)


def _reject_clashes(repo, exclude_id=None, **fields):
    taken = repo.clashes(exclude_id=exclude_id, **{k: v for k, v in fields.items() if k in UNIQUE_FIELDS})
    if taken:
        raise BadRequestError(f"A store with this {', '.join(taken)} already exists.")


def _load_owned(repo, store_id, owner_id) -> Store:
    store = repo.find_owned(store_id, owner_id)
    if store is None:
        raise NotFoundError(f"No store with ID {store_id}.")
    return store


@marketplace.command_handler(part_of=Store)
class StoreDirectoryHandler:
    @handle(RegisterStore)
    def register_store(self, command):
        owner = find_user(command.owner_id)
        if owner is None:
            raise NotFoundError(f"No user with ID {command.owner_id}.")
        if owner.role != Role.SELLER.value:
            raise ForbiddenError("Only sellers can open a store.")

        repo = current_domain.repository_for(Store)
        if repo.find_for_owner(command.owner_id) is not None:
            raise BadRequestError("This seller already has a store.")

        details = {field_name: getattr(command, field_name) for field_name in EDITABLE_FIELDS}
        _reject_clashes(repo, **details)

        store = Store.register(owner_id=command.owner_id, **details)
        repo.add(store)
        logger.info("store_registered", store_id=str(store.id), owner_id=str(command.owner_id))
        return str(store.id)

    @handle(UpdateStore)
    def update_store(self, command):
        repo = current_domain.repository_for(Store)
        store = _load_owned(repo, command.store_id, command.owner_id)

        changes = {
            field_name: getattr(command, field_name)
            for field_name in EDITABLE_FIELDS
            if getattr(command, field_name) is not None
        }
        _reject_clashes(repo, exclude_id=store.id, **changes)

        store.update_details(**changes)
        repo.add(store)
        return str(store.id)

    @handle(CloseStore)
    def close_store(self, command):
        repo = current_domain.repository_for(Store)
        store = _load_owned(repo, command.store_id, command.owner_id)
        repo._dao.delete(store)
        logger.info("store_closed", store_id=str(store.id))
