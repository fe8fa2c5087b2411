"""Service and ServiceSet domain entities."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..enums import ServiceKind

DEFAULT_WEIGHT = 60


@dataclass(frozen=True)
class Service:
    """A single addressable endpoint plus its static configuration.

    Two services are equal when every field is equal; that equality is the
    unit of set membership when diffing refresh results.

    Attributes:
        kind: Origin tag of the discovery source
        host: Resolved address
        port: Port of the endpoint
        name: Display identifier, ``"<index>-<configured host>"`` for DNS
        weight: Load balancing weight carried through to consumers
        shared: Reserved for multi-source de-duplication, always False here
        username: Username for authentication per host
        password: Password for authentication per host
        shared_key: Shared key for authentication per host, None when unset
    """

    kind: ServiceKind
    host: str
    port: int
    name: str
    weight: int = DEFAULT_WEIGHT
    shared: bool = False
    username: str = ""
    password: str = field(default="", repr=False)
    shared_key: str | None = field(default=None, repr=False)


class ServiceSet:
    """Immutable set of services with a deterministic enumeration order.

    Duplicates collapse onto their first occurrence. Order is the order in
    which services were supplied (entry order, then resolution order), and is
    ignored by equality.
    """

    __slots__ = ("_members", "_order")

    def __init__(self, services: Iterable[Service] = ()) -> None:
        """Build a set from services, keeping first-seen order.

        Args:
            services: Services in enumeration order
        """
        members: dict[Service, None] = dict.fromkeys(services)
        self._members = frozenset(members)
        self._order = tuple(members)

    def __iter__(self) -> Iterator[Service]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __bool__(self) -> bool:
        return bool(self._order)

    def __contains__(self, item: object) -> bool:
        return item in self._members

    def __sub__(self, other: ServiceSet) -> ServiceSet:
        """Services in this set that are not in ``other``, in this set's order."""
        return ServiceSet(service for service in self._order if service not in other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServiceSet):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"ServiceSet({list(self._order)!r})"

    def __getitem__(self, index: int) -> Service:
        return self._order[index]
