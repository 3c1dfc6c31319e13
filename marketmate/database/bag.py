"""Bag storage for the storefront"""

import json
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional, Union

from pydantic import ValidationError

from ..models.bag import BagLine, BagLines, BagSummary
from ..models.product import Product
from ..services.notifications import Notifier
from ..services.quantity import InvalidQuantity, parse_quantity
from .storage import KeyValueStorage, StorageCorruptError, StorageError, StorageEvent

logger = logging.getLogger(__name__)

BagObserver = Callable[["BagStore"], None]


@dataclass
class BagChange:
    """Outcome of a bag mutation: the affected line and the notice sent, if any"""
    line: Optional[BagLine] = None
    message: Optional[str] = None


class BagStore:
    """
    Ordered bag of product lines with write-through persistence.

    Lines are keyed by product id, at most one per id, each with a quantity
    of at least 1. Every mutation updates the in-memory list, writes the
    whole list to the storage slot, then calls the subscribed observers.
    Storage failures are logged and the session carries on in memory.
    """

    def __init__(self, storage: KeyValueStorage, key: str, notifier: Notifier):
        self.storage = storage
        self.key = key
        self.notifier = notifier
        self._lines: list[BagLine] = []
        self._observers: list[BagObserver] = []
        self._remove_listener = storage.add_listener(self._on_storage_event)

    # -------- Persistence --------
    def hydrate(self) -> None:
        """Load the bag from its storage slot, falling back to empty"""
        self._lines = self._read_slot(discard_corrupt=True)

    def reload(self) -> None:
        """Replace the in-memory bag with the slot's current contents"""
        self._lines = self._read_slot(discard_corrupt=False)
        self._notify_observers()

    def _read_slot(self, discard_corrupt: bool) -> list[BagLine]:
        try:
            raw = self.storage.get_item(self.key)
        except StorageCorruptError as e:
            return self._malformed(e, discard_corrupt)
        except StorageError:
            logger.exception(f"Failed to read bag slot {self.key!r}; starting empty")
            return []

        if raw is None:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            lines = BagLines.validate_python(data)
        except (ValueError, ValidationError, RecursionError) as e:
            # RecursionError: nesting deeper than the JSON decoder can follow
            return self._malformed(e, discard_corrupt)

        return _dedupe(lines)

    def _malformed(self, error: Exception, discard_corrupt: bool) -> list[BagLine]:
        logger.warning(f"Discarding malformed bag slot {self.key!r}: {error}")
        if discard_corrupt:
            self._discard_slot()
        return []

    def _discard_slot(self) -> None:
        try:
            self.storage.remove_item(self.key, origin=self)
        except StorageError:
            logger.exception(f"Failed to remove corrupted bag slot {self.key!r}")

    def _persist(self) -> None:
        payload = BagLines.dump_json(self._lines).decode("utf-8")
        try:
            self.storage.set_item(self.key, payload, origin=self)
        except StorageError:
            logger.exception(
                f"Failed to persist bag slot {self.key!r}; continuing in memory"
            )

    def _on_storage_event(self, event: StorageEvent) -> None:
        if event.key != self.key or event.origin is self:
            return
        logger.debug(f"Bag slot {self.key!r} changed by another writer; resyncing")
        self.reload()

    def _commit(self) -> None:
        self._persist()
        self._notify_observers()

    def _notify(self, title: str, description: str, destructive: bool = False) -> str:
        self.notifier.notify(title, description, destructive=destructive)
        return description

    # -------- Observers --------
    def subscribe(self, observer: BagObserver) -> Callable[[], None]:
        """Call `observer(store)` after every change; returns an unsubscribe function"""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify_observers(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                logger.exception(f"Bag observer failed for slot {self.key!r}")

    def close(self) -> None:
        """Detach from storage change signals"""
        self._remove_listener()
        self._observers.clear()

    # -------- Mutations --------
    def add_to_bag(self, product: Product) -> BagChange:
        """Add one unit of a product, appending a new line if needed"""
        index = self._index_of(product.id)
        if index is not None:
            line = self._lines[index]
            line = line.model_copy(update={"quantity": line.quantity + 1})
            self._lines[index] = line
            message = self._notify(
                "Item Updated in Bag",
                f"{product.name} quantity increased.",
            )
        else:
            line = BagLine(**product.model_dump(exclude={"quantity"}), quantity=1)
            self._lines.append(line)
            message = self._notify(
                "Item Added to Bag",
                f"{product.name} has been added to your bag.",
            )

        self._commit()
        return BagChange(line=line.model_copy(), message=message)

    def remove_from_bag(self, product_id: str) -> BagChange:
        """Remove a line; unknown ids are ignored"""
        index = self._index_of(product_id)
        if index is None:
            return BagChange()

        removed = self._lines.pop(index)
        message = self._notify(
            "Item Removed",
            f"{removed.name} has been removed from your bag.",
            destructive=True,
        )
        self._commit()
        return BagChange(line=removed, message=message)

    def update_quantity(
        self,
        product_id: str,
        quantity: Union[int, str],
    ) -> BagChange:
        """
        Set a line's quantity.

        Quantities below 1 remove the line, and the change carries the
        removed line. Input that is not an integer leaves the line
        unchanged. Unknown ids are ignored.
        """
        index = self._index_of(product_id)
        if index is None:
            return BagChange()

        parsed = parse_quantity(quantity)
        if isinstance(parsed, InvalidQuantity):
            logger.info(
                f"Ignoring invalid quantity {parsed.raw!r} for product {product_id}"
            )
            return BagChange(line=self._lines[index].model_copy())

        if parsed.value < 1:
            return self.remove_from_bag(product_id)

        line = self._lines[index].model_copy(update={"quantity": parsed.value})
        self._lines[index] = line
        self._commit()
        return BagChange(line=line.model_copy())

    def clear_bag(self) -> BagChange:
        """Empty the bag"""
        self._lines = []
        message = self._notify(
            "Bag Cleared",
            "All items have been removed from your bag.",
        )
        self._commit()
        return BagChange(message=message)

    # -------- Queries --------
    @property
    def items(self) -> list[BagLine]:
        return [line.model_copy() for line in self._lines]

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, product_id: str) -> Optional[BagLine]:
        index = self._index_of(product_id)
        return self._lines[index].model_copy() if index is not None else None

    def get_bag_total(self) -> float:
        return sum((line.price * line.quantity for line in self._lines), 0.0)

    def get_bag_item_count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def summary(self) -> BagSummary:
        return BagSummary(
            items=self.items,
            total=self.get_bag_total(),
            item_count=self.get_bag_item_count(),
        )

    def _index_of(self, product_id: str) -> Optional[int]:
        return next(
            (i for i, line in enumerate(self._lines) if line.id == product_id),
            None,
        )


def _dedupe(lines: list[BagLine]) -> list[BagLine]:
    """Keep the first line per product id"""
    seen: set[str] = set()
    result = []
    for line in lines:
        if line.id in seen:
            logger.warning(f"Dropping duplicate persisted bag line for product {line.id}")
            continue
        seen.add(line.id)
        result.append(line)
    return result


class BagDatabase:
    """
    Bag stores keyed by bag id, each backed by its own storage slot.

    At most `max_bags` stores stay open; the least recently used one is
    closed when another bag is opened past the cap. Its slot is kept, so
    asking for it again rehydrates it.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        notifier: Notifier,
        key_prefix: str = "marketmateBag",
        max_bags: int = 1000,
    ):
        if max_bags < 1:
            raise ValueError("max_bags must be at least 1")
        self.storage = storage
        self.notifier = notifier
        self.key_prefix = key_prefix
        self.max_bags = max_bags
        self.bags: OrderedDict[str, BagStore] = OrderedDict()

    def slot_key(self, bag_id: str) -> str:
        return f"{self.key_prefix}:{bag_id}"

    def get_bag(self, bag_id: str) -> BagStore:
        """Get a bag, creating and hydrating it on first use"""
        bag = self.bags.get(bag_id)
        if bag is not None:
            self.bags.move_to_end(bag_id)
            return bag

        bag = BagStore(self.storage, self.slot_key(bag_id), self.notifier)
        bag.hydrate()
        logger.debug(f"Bag {bag_id} ready with {bag.get_bag_item_count()} items")
        self.bags[bag_id] = bag

        while len(self.bags) > self.max_bags:
            evicted_id, evicted = self.bags.popitem(last=False)
            evicted.close()
            logger.debug(f"Closed idle bag {evicted_id}")
        return bag

    def close(self) -> None:
        for bag in self.bags.values():
            bag.close()
        self.bags.clear()
