"""Domain events for the Store aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Store")
class StoreRegistered:
    """A seller opened their store."""

    __version__ = 1

    store_id = Identifier(required=True)
    owner_id = Identifier(required=True)
    name = String(required=True)
    province = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Store")
class StoreUpdated:
    __version__ = 1

    store_id = Identifier(required=True)
    changed_fields = String(required=True)
