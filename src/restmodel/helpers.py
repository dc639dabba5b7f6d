import collections.abc
import datetime
import decimal
import enum
import typing

from .types import JSONValue


def to_array(value: typing.Any) -> JSONValue:
    """
    Normalizes a value into its plain, JSON-serializable form.

    * models and links are replaced by their bodies.
    * mappings become dicts and other collections become lists, recursively.
    * dates and times become ISO 8601 strings, decimals become strings and
      enum members are replaced by their values.
    * any other value is returned as-is.
    """
    from .model import Model
    from .links import Link

    if isinstance(value, (Model, Link)):
        return value.get_body()
    elif isinstance(value, enum.Enum):
        return to_array(value.value)
    elif isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    elif isinstance(value, decimal.Decimal):
        return str(value)
    elif isinstance(value, collections.abc.Mapping):
        return {k: to_array(v) for k, v in value.items()}
    elif isinstance(value, (str, bytes, bytearray)):
        return value
    elif isinstance(value, (collections.abc.Sequence, collections.abc.Set)):
        return [to_array(v) for v in value]
    return value
