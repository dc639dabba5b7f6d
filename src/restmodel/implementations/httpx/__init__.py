from .core import HttpLinkResolver, HttpResponseEnvelope  # noqa
from .defaults import HttpResolverConfig  # noqa
