import collections.abc
import typing

T = typing.TypeVar("T")


class ArrayList(collections.abc.MutableSequence, typing.Generic[T]):
    """
    An ordered container holding the members of a "many" relation.
    A model always keeps the same :py:class:`ArrayList` instance in the slot of a
    "many" relation and empties it with :py:meth:`reset` before repopulating it.

    :param Iterable[T] items: the initial items.
    """

    _items: typing.List[T]

    def reset(self) -> None:
        """
        Removes every item.
        """
        self._items.clear()

    def has_models(self) -> bool:
        """
        Returns :py:const:`True` if the container holds at least one model instance.
        """
        from .model import Model

        return any(isinstance(item, Model) for item in self._items)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return type(self)(self._items[i])
        return self._items[i]

    def __setitem__(self, i, value) -> None:
        self._items[i] = value

    def __delitem__(self, i) -> None:
        del self._items[i]

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, i: int, value: T) -> None:
        self._items.insert(i, value)

    def __eq__(self, other) -> bool:
        if isinstance(other, ArrayList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def __init__(self, items: typing.Iterable[T] = ()):
        self._items = list(items)
