"""Injectable random source shared by the grid, fleet setup and the bot."""

from __future__ import annotations

from typing import MutableSequence, Protocol, Sequence, Sized, TypeVar

from .errors import EmptyCollectionError

T = TypeVar("T")


class RandomSource(Protocol):
    """The subset of :class:`random.Random` the engine relies on."""

    def randrange(self, stop: int) -> int: ...

    def shuffle(self, x: MutableSequence) -> None: ...


def random_index(rng: RandomSource, collection: Sized) -> int:
    """Return a uniform index into ``collection``."""
    if len(collection) == 0:
        raise EmptyCollectionError("Cannot pick from an empty collection.")
    return rng.randrange(len(collection))


def pick(rng: RandomSource, items: Sequence[T]) -> T:
    """Return a uniformly chosen element of ``items``."""
    return items[random_index(rng, items)]
