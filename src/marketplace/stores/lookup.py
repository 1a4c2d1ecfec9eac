"""Store lookups used outside the store directory."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.stores.store import Store


def find_store(store_id) -> Store | None:
    try:
        return current_domain.repository_for(Store).get(store_id)
    except ObjectNotFoundError:
        return None


def find_store_for_owner(owner_id) -> Store | None:
    return current_domain.repository_for(Store).find_for_owner(owner_id)
