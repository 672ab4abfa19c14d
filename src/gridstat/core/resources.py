"""Resource metrics reported per host/queue and their typed accessors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from gridstat.core.exceptions import ParseError, ResourceNotFoundError
from gridstat.core.numbers import parse_float, parse_int
from gridstat.core.storage import StorageValue, parse_storage_value

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

LOAD_WINDOWS = ("short", "medium", "long")


@dataclass
class Resource:
    """A single named metric as reported by the scheduler.

    Examples:
        Resource("num_proc", "hl", "8")
        Resource("mem_free", "hl", "10.2G")
        Resource("load_short", "hl", "0.35")
    """

    name: str
    type: str = ""
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type, "value": self.value}


@dataclass
class ResourceList:
    """Flat, unordered collection of resources for one host or queue.

    Names are not required to be unique; lookups return the first match.
    Every accessor re-scans the list. Not internally synchronized.
    """

    resources: list[Resource] = field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> ResourceList:
        """Build a list from ``(name, value)`` pairs with no type tag."""
        return cls([Resource(name, value=value) for name, value in pairs])

    def add(self, name: str, value: str, type: str = "") -> ResourceList:
        """Append a resource."""
        self.resources.append(Resource(name, type, value))
        return self

    def locate(self, key: str) -> Resource:
        """Return the first resource named *key*.

        Raises:
            ResourceNotFoundError: If no resource has that name.
        """
        for resource in self.resources:
            if resource.name == key:
                return resource
        raise ResourceNotFoundError(key)

    def get(self, key: str) -> Resource | None:
        """Return the first resource named *key*, or None."""
        try:
            return self.locate(key)
        except ResourceNotFoundError:
            return None

    # ------------------------------------------------------------------
    # Generic coercion
    # ------------------------------------------------------------------

    def get_float(self, key: str) -> float:
        resource = self.locate(key)
        try:
            return parse_float(resource.value)
        except ParseError as exc:
            raise ParseError(
                f"Resource {key!r} is not a float: {resource.value!r}"
            ) from exc

    def get_int(self, key: str) -> int:
        resource = self.locate(key)
        try:
            return parse_int(resource.value)
        except ParseError as exc:
            raise ParseError(
                f"Resource {key!r} is not an integer: {resource.value!r}"
            ) from exc

    def get_storage_value(self, key: str) -> StorageValue:
        resource = self.locate(key)
        try:
            return parse_storage_value(resource.value)
        except ParseError as exc:
            # Re-raise with the key attached, keeping the exception type
            raise type(exc)(f"Resource {key!r}: {exc}") from exc

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def load(self, window: str) -> float:
        """Load average for *window* (``short``, ``medium`` or ``long``)."""
        return self.get_float(f"load_{window}")

    def num_processors(self) -> int:
        """Number of processors (``num_proc``) as a 32-bit integer."""
        value = self.get_int("num_proc")
        if not INT32_MIN <= value <= INT32_MAX:
            raise ParseError(f"Resource 'num_proc' out of 32-bit range: {value}")
        return value

    def free_memory(self) -> StorageValue:
        return self.get_storage_value("mem_free")

    def free_swap(self) -> StorageValue:
        return self.get_storage_value("swap_free")

    def free_virtual_memory(self) -> StorageValue:
        return self.get_storage_value("virtual_free")

    def total_memory(self) -> StorageValue:
        return self.get_storage_value("mem_total")

    def total_swap(self) -> StorageValue:
        return self.get_storage_value("swap_total")

    def total_virtual(self) -> StorageValue:
        return self.get_storage_value("virtual_total")

    def memory_used(self) -> StorageValue:
        return self.get_storage_value("mem_used")

    def swap_used(self) -> StorageValue:
        return self.get_storage_value("swap_used")

    def to_dicts(self) -> list[dict[str, str]]:
        return [r.to_dict() for r in self.resources]

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def __bool__(self) -> bool:
        return bool(self.resources)
