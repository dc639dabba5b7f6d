import logging
import typing

import httpx

from ...exceptions import UnresolvableLinkError
from ...interfaces import LinkResolver, ResponseEnvelope
from ...links import Link
from ...model import Model
from ...utils import is_plain_sequence
from .defaults import HttpResolverConfig

logger = logging.getLogger(__name__)


class HttpResponseEnvelope(ResponseEnvelope):
    response: httpx.Response

    def get_body(self) -> typing.Any:
        return self.response.json()

    def __init__(self, response: httpx.Response):
        self.response = response


class HttpLinkResolver(LinkResolver):
    """
    A :py:class:`LinkResolver` that fetches the linked resources with ``httpx``.

    :param Optional[httpx.Client] client: the client to issue requests with.
                                          One is built from ``config`` if omitted.
    :param Optional[HttpResolverConfig] config: the configuration of the built client.
    """

    client: httpx.Client
    _owns_client: bool

    def link(
        self,
        href: str,
        target: typing.Union[str, typing.Type[Model]],
        rel: typing.Optional[str] = None,
    ) -> Link:
        """
        Creates a :py:class:`Link` that resolves through this resolver.
        """
        return Link(href, rel=rel, target=target, resolver=self)

    def fetch(self, link: Link) -> HttpResponseEnvelope:
        logger.debug("GET %s", link.href)
        response = self.client.get(link.href)
        response.raise_for_status()
        return HttpResponseEnvelope(response)

    def resolve(self, link: Link) -> typing.Union[Model, typing.Sequence[Model]]:
        target = link.target
        if target is None:
            raise UnresolvableLinkError(link, "the target model is unknown")
        envelope = self.fetch(link)
        body = envelope.get_body()
        if is_plain_sequence(body):
            return [target.from_body(item) for item in body]
        return target.from_body(body)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HttpLinkResolver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __init__(
        self,
        client: typing.Optional[httpx.Client] = None,
        config: typing.Optional[HttpResolverConfig] = None,
    ):
        if client is None:
            config = config if config is not None else HttpResolverConfig()
            client = httpx.Client(
                base_url=config.base_url,
                timeout=config.timeout,
                headers=config.headers,
            )
            self._owns_client = True
        else:
            self._owns_client = False
        self.client = client
