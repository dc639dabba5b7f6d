import logging
import typing

from .exceptions import UnknownPropertyError

logger = logging.getLogger(__name__)


class Component:
    """
    The base of every object exposing properties by name.

    A property ``foo`` that is not otherwise known is served by a ``get_foo()``
    method when read and by a ``set_foo(value)`` method when written.
    Methods of the base classes themselves (``get_name``, ``set_property``...)
    are never taken for accessors.
    """

    _reserved_accessors: typing.ClassVar[typing.FrozenSet[str]] = frozenset()

    def _accessor(self, name: str) -> typing.Optional[typing.Callable[..., typing.Any]]:
        if name in self._reserved_accessors:
            return None
        accessor = getattr(type(self), name, None)
        return accessor if callable(accessor) else None

    def get_name(self) -> str:
        """
        Returns the name used to refer to this kind of object in messages.
        """
        return type(self).__name__

    def get_property(self, name: str) -> typing.Any:
        getter = self._accessor(f"get_{name}")
        if getter is not None:
            return getter(self)
        raise UnknownPropertyError(self, name)  # type: ignore

    def set_property(self, name: str, value: typing.Any) -> None:
        setter = self._accessor(f"set_{name}")
        if setter is not None:
            setter(self, value)
        else:
            logger.debug("ignoring unknown property %s of %s", name, self.get_name())


Component._reserved_accessors = frozenset(dir(Component))
