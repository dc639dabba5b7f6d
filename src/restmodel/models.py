import enum
import typing
from collections import OrderedDict

from .deferred import Deferred
from .utils import assert_not_none, split_names


class Cardinality(enum.Enum):
    ONE = "one"
    MANY = "many"


class ModelMemberDescriptor:
    name: str

    def initial_value(self) -> typing.Any:
        return None


class AttributeDescriptor(ModelMemberDescriptor):
    """
    Describes a plain attribute, which holds whatever value is written to it.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def __init__(self, name: str):
        self.name = name


class RelationDescriptor(ModelMemberDescriptor):
    _target: typing.Union[typing.Type["Model"], Deferred[typing.Type["Model"]]]
    cardinality: Cardinality

    @property
    def target(self) -> typing.Type["Model"]:
        if isinstance(self._target, Deferred):
            return self._target()
        else:
            return self._target

    def build(self, data: typing.Any) -> "Model":
        """
        Creates a new instance of the target model populated with ``data``.

        :param Any data: a mapping or a response envelope.
        :return: the populated instance.
        """
        return self.target().set_attributes(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self._target!r})"

    def __init__(
        self,
        target: typing.Union[typing.Type["Model"], Deferred[typing.Type["Model"]]],
        name: str,
    ):
        self._target = target
        self.name = name


class ToOneRelationDescriptor(RelationDescriptor):
    cardinality = Cardinality.ONE
    """
    Always set to :py:class:`Cardinality`.``ONE``
    """


class ToManyRelationDescriptor(RelationDescriptor):
    cardinality = Cardinality.MANY
    """
    Always set to :py:class:`Cardinality`.``MANY``
    """

    def initial_value(self) -> "ArrayList":
        return ArrayList()


RuleSet = typing.Tuple[typing.Sequence[str], str]
RuleDeclaration = typing.Tuple[typing.Union[str, typing.Sequence[str]], str]


class ModelDescriptor:
    """
    A :py:class:`ModelDescriptor` holds the declared shape of a model class.
    It is built once per class from the inner ``Meta`` declarations.

    :param str name: The name of the model type.
    :param Iterable[AttributeDescriptor] attributes: The descriptors for the plain attributes.
    :param Iterable[RelationDescriptor] relations: The descriptors for the relations.
    :param types: pairs of attribute names, comma-joined or as a sequence, and a rule token.
    :param Mapping[str, str] mapping: aliases to canonical member names.
    """

    name: str
    """
    The name of the model type.
    """
    _attributes: typing.MutableMapping[str, AttributeDescriptor]
    _relations: typing.MutableMapping[str, RelationDescriptor]
    _types: typing.List[RuleSet]
    _mapping: typing.Dict[str, str]

    @property
    def attributes(self) -> typing.Mapping[str, AttributeDescriptor]:
        """
        The mapping of attribute names to :py:class:`AttributeDescriptor`s.
        """
        return self._attributes

    @property
    def relations(self) -> typing.Mapping[str, RelationDescriptor]:
        """
        The mapping of relation names to :py:class:`RelationDescriptor`s.
        """
        return self._relations

    @property
    def types(self) -> typing.Sequence[RuleSet]:
        return self._types

    @property
    def mapping(self) -> typing.Mapping[str, str]:
        return self._mapping

    def members(self) -> typing.Iterator[ModelMemberDescriptor]:
        """
        Iterates over the members that own a slot on every instance: the declared
        attributes, then the "many" relations not declared as attributes.
        A "one" relation only gets a slot once it is written, unless it is an attribute.
        """
        for name, attr in self._attributes.items():
            yield self._relations.get(name, attr)
        for name, rel in self._relations.items():
            if name not in self._attributes and rel.cardinality is Cardinality.MANY:
                yield rel

    def relation(
        self, name: str, cardinality: typing.Optional[Cardinality] = None
    ) -> typing.Optional[RelationDescriptor]:
        """
        Looks up a relation by name.

        :param str name: the relation name.
        :param Optional[Cardinality] cardinality: if given, the cardinality to match.
        :return: the relation descriptor or :py:const:`None`.
        """
        rel = self._relations.get(name)
        if rel is None or (cardinality is not None and rel.cardinality is not cardinality):
            return None
        return rel

    def collect_rules(self, attribute: str) -> typing.List[str]:
        """
        Collects every rule token declared for the given attribute.
        """
        return [rule for names, rule in self._types if attribute in names]

    def __init__(
        self,
        name: str,
        attributes: typing.Iterable[AttributeDescriptor] = (),
        relations: typing.Iterable[RelationDescriptor] = (),
        types: typing.Iterable[RuleDeclaration] = (),
        mapping: typing.Optional[typing.Mapping[str, str]] = None,
    ) -> None:
        self.name = name
        self._attributes = OrderedDict(
            ((assert_not_none(attr.name), attr) for attr in attributes)
        )
        self._relations = OrderedDict(
            ((assert_not_none(rel.name), rel) for rel in relations)
        )
        self._types = [(split_names(names), rule) for names, rule in types]
        self._mapping = dict(mapping or {})


from .arraylist import ArrayList  # noqa: E402

if typing.TYPE_CHECKING:
    from .model import Model  # noqa: E402
