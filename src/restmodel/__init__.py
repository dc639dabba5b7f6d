from .arraylist import ArrayList  # noqa
from .declarative import Many, One, registry  # noqa
from .exceptions import (  # noqa
    InvalidAttributesError,
    InvalidDeclarationError,
    ModelError,
    RequiredAttributeMissingError,
    RestModelException,
    UnknownModelError,
    UnknownPropertyError,
    UnresolvableLinkError,
)
from .helpers import to_array  # noqa
from .interfaces import LinkResolver, ResponseEnvelope  # noqa
from .links import Link, Resolved  # noqa
from .model import Model  # noqa
from .models import Cardinality  # noqa
