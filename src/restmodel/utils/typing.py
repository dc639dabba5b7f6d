import collections.abc
import typing

T = typing.TypeVar("T")


def assert_not_none(value: typing.Optional[T]) -> T:
    assert value is not None
    return value


def is_plain_sequence(value: typing.Any) -> bool:
    """
    Tells if the value is a sequence that is not also a string-like value.
    """
    return isinstance(value, collections.abc.Sequence) and not isinstance(
        value, (str, bytes, bytearray)
    )


def split_names(names: typing.Union[str, typing.Iterable[str]]) -> typing.List[str]:
    """
    Splits a comma-joined list of names (``"id, name"``) into stripped names.
    An iterable of names is accepted as well, every element being stripped.
    """
    if isinstance(names, str):
        names = names.split(",")
    return [name.strip() for name in names if name.strip()]
