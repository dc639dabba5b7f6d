import dataclasses
import logging
import typing

from .exceptions import UnresolvableLinkError
from .interfaces import LinkResolver

logger = logging.getLogger(__name__)

ResolvedValue = typing.Union["Model", typing.Sequence["Model"]]


@dataclasses.dataclass(frozen=True)
class Resolved:
    """
    The resolved state of a :py:class:`Link`, holding the fetched model(s).
    """

    link: "Link"
    value: ResolvedValue


class Link:
    """
    A :py:class:`Link` is the unresolved state of a reference to a remote resource.
    Calling :py:meth:`resolve` fetches the resource through a :py:class:`LinkResolver`
    and returns a :py:class:`Resolved`; the link itself never changes, it is up to the
    caller to store the resolved value in place of the link.

    :param str href: the URL of the resource.
    :param Optional[str] rel: the relation type of the link.
    :param target: the model class (or its registered name) the resource maps to.
    :param Optional[LinkResolver] resolver: the resolver used by :py:meth:`resolve`.
    """

    href: str
    rel: typing.Optional[str]
    _target: typing.Union[None, str, typing.Type["Model"]]
    resolver: typing.Optional[LinkResolver]

    @property
    def target(self) -> typing.Optional[typing.Type["Model"]]:
        """
        The model class the linked resource maps to, or :py:const:`None` if not known.
        """
        if isinstance(self._target, str):
            return registry.lookup(self._target)
        return self._target

    def resolve(self, resolver: typing.Optional[LinkResolver] = None) -> Resolved:
        """
        Fetches the linked resource.

        :param Optional[LinkResolver] resolver: overrides the resolver given to the constructor.
        :return: the resolved state.
        """
        resolver = resolver if resolver is not None else self.resolver
        if resolver is None:
            raise UnresolvableLinkError(self, "no resolver is bound")
        logger.debug("resolving link %s", self.href)
        return Resolved(self, resolver.resolve(self))

    def get_body(self) -> typing.Dict[str, str]:
        body = {"href": self.href}
        if self.rel is not None:
            body["rel"] = self.rel
        return body

    @classmethod
    def from_body(
        cls,
        body: typing.Mapping[str, typing.Any],
        target: typing.Union[None, str, typing.Type["Model"]] = None,
        resolver: typing.Optional[LinkResolver] = None,
    ) -> "Link":
        """
        Creates a link from its serialized form, ``{"href": ..., "rel": ...}``.
        """
        return cls(body["href"], rel=body.get("rel"), target=target, resolver=resolver)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Link):
            return NotImplemented
        return (self.href, self.rel) == (other.href, other.rel)

    def __hash__(self) -> int:
        return hash((self.href, self.rel))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.href!r}, rel={self.rel!r})"

    def __init__(
        self,
        href: str,
        rel: typing.Optional[str] = None,
        target: typing.Union[None, str, typing.Type["Model"]] = None,
        resolver: typing.Optional[LinkResolver] = None,
    ):
        self.href = href
        self.rel = rel
        self._target = target
        self.resolver = resolver


from .declarative import registry  # noqa: E402

if typing.TYPE_CHECKING:
    from .model import Model  # noqa: E402
