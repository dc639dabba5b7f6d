import collections.abc
import json
import logging
import typing

from .arraylist import ArrayList
from .component import Component
from .declarative import declare
from .exceptions import InvalidAttributesError, RequiredAttributeMissingError
from .helpers import to_array
from .links import Link
from .models import Cardinality, ModelDescriptor
from .types import Body
from .utils import is_plain_sequence

logger = logging.getLogger(__name__)

LINKS_KEY = "_links"
"""
The key under which the API delivers the links of a resource; writes to it are ignored.
"""

REQUIRED = "required"

M = typing.TypeVar("M", bound="Model")


class Model(Component):
    """
    The base class of the models mapping API resources.

    A concrete model declares its shape with an inner ``Meta`` class::

        class Order(Model):
            class Meta:
                attributes = ["id", "number", "customer", "items"]
                relations = {
                    "customer": One(Customer),
                    "items": Many("OrderItem"),
                }
                types = [
                    ("id, number", "required"),
                    ("items", "required"),
                ]
                mapping = {"nr": "number"}

    Members are read and written by name, either with :py:meth:`get` and
    :py:meth:`set` or as ordinary attributes (``order.number``).
    A name that is neither a declared member nor an alias is handed over to
    :py:class:`Component`.
    """

    _descriptor: typing.ClassVar[ModelDescriptor] = ModelDescriptor("Model")
    _attributes: typing.Dict[str, typing.Any]
    _rules: typing.Dict[str, typing.List[str]]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._descriptor = declare(cls)

    @classmethod
    def descriptor(cls) -> ModelDescriptor:
        return cls._descriptor

    @classmethod
    def from_body(cls: typing.Type[M], attributes: typing.Any) -> M:
        """
        Creates an instance populated from a mapping or a response envelope.
        """
        return cls().set_attributes(attributes)

    def get_name(self) -> str:
        return self._descriptor.name

    def get(self, name: str) -> typing.Any:
        """
        Reads a member.  A :py:class:`Link` held by the member is resolved and
        replaced by the resolved value; so is every link in a list of links.

        :param str name: an attribute name, a relation name or an alias.
        :return: the value of the member.
        """
        if name in self._attributes:
            value = self._attributes[name]
            if isinstance(value, Link):
                value = self._attributes[name] = value.resolve().value
            elif is_plain_sequence(value) and len(value) > 0 and isinstance(value[0], Link):
                resolved = [
                    item.resolve().value if isinstance(item, Link) else item for item in value
                ]
                if isinstance(value, collections.abc.MutableSequence):
                    for i, item in enumerate(resolved):
                        value[i] = item
                else:
                    value = self._attributes[name] = resolved
            return value
        elif self._descriptor.relation(name, Cardinality.MANY) is not None:
            return ArrayList()
        elif self._descriptor.relation(name, Cardinality.ONE) is not None:
            return None
        elif name in self._descriptor.mapping:
            return self.get(self._descriptor.mapping[name])
        else:
            return self.get_property(name)

    def set_attribute(self, name: str, value: typing.Any) -> bool:
        """
        Writes a member.

        :param str name: an attribute name, a relation name or an alias.
        :param Any value: the value.  Relations accept mappings (a sequence of them
                          for "many" relations) or anything :py:meth:`set_attributes` accepts.
        :return: :py:const:`False` if the name is not known to the model.
        """
        if value is None or name == LINKS_KEY:
            return True

        rel = self._descriptor.relation(name)
        if rel is not None and rel.cardinality is Cardinality.MANY:
            if isinstance(value, collections.abc.Mapping):
                items = list(value.values())
            else:
                items = list(value)
            container = self._attributes[name]
            container.reset()
            for data in items:
                container.append(rel.build(data))
        elif rel is not None:
            self._attributes[name] = rel.build(value)
        elif name in self._attributes:
            self._attributes[name] = value
        elif name in self._descriptor.mapping:
            self.set(self._descriptor.mapping[name], value)
        else:
            return False
        return True

    def set(self, name: str, value: typing.Any) -> None:
        if not self.set_attribute(name, value):
            self.set_property(name, value)

    def set_attributes(self: M, attributes: typing.Any) -> M:
        """
        Writes every entry of a mapping.

        :param Any attributes: a mapping, or an object whose ``get_body()``
                               returns one such as a response envelope.
        :return: the model itself.
        :raises InvalidAttributesError: if no mapping can be obtained.
        """
        if not isinstance(attributes, collections.abc.Mapping) and callable(
            getattr(attributes, "get_body", None)
        ):
            attributes = attributes.get_body()

        if not isinstance(attributes, collections.abc.Mapping):
            raise InvalidAttributesError(self, attributes)
        for name, value in attributes.items():
            self.set(name, value)
        return self

    def get_attribute_rules(self, attribute: str) -> typing.List[str]:
        """
        Returns the rule tokens declared for the attribute in ``Meta.types``.
        """
        if attribute not in self._rules:
            self._rules[attribute] = self._descriptor.collect_rules(attribute)
        return self._rules[attribute]

    def validate(self) -> None:
        """
        Checks every required attribute, descending into related models.

        :raises RequiredAttributeMissingError: on the first attribute found missing.
        """
        for attribute, value in self._attributes.items():
            if REQUIRED not in self.get_attribute_rules(attribute):
                continue
            if isinstance(value, Model):
                value.validate()
            elif isinstance(value, ArrayList) and value.has_models():
                for obj in value:
                    if isinstance(obj, Model):
                        obj.validate()
            elif (
                value is None
                or (isinstance(value, str) and value.strip() == "")
                or (isinstance(value, ArrayList) and len(value) == 0)
            ):
                raise RequiredAttributeMissingError(self, attribute)

    def is_valid(self) -> bool:
        try:
            self.validate()
        except RequiredAttributeMissingError as e:
            logger.debug("%s", e)
            return False
        return True

    def get_body(self) -> Body:
        """
        Returns the plain mapping representation of the model.
        Empty "many" relations are left out.
        """
        body: Body = {}
        for key, attribute in self._attributes.items():
            if isinstance(attribute, ArrayList):
                if len(attribute) > 0:
                    body[key] = [to_array(obj) for obj in attribute]
            elif isinstance(attribute, (Link, Model)):
                body[key] = attribute.get_body()
            else:
                body[key] = to_array(attribute)
        return body

    def to_array(self) -> Body:
        """
        Alias of :py:meth:`get_body`.
        """
        return self.get_body()

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.get_body(), **kwargs)

    def __getattr__(self, name: str) -> typing.Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.get(name)

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __repr__(self) -> str:
        return f"{self.get_name()}({self.get_body()!r})"

    def __init__(self, **attributes):
        if type(self) is Model:
            raise TypeError("Model cannot be instantiated directly")
        self._attributes = {
            member.name: member.initial_value() for member in self._descriptor.members()
        }
        self._rules = {}
        if attributes:
            self.set_attributes(attributes)


Model._reserved_accessors = frozenset(dir(Model))
