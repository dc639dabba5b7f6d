import collections.abc
import dataclasses
import logging
import typing

from .deferred import Deferred
from .exceptions import InvalidDeclarationError, UnknownModelError
from .models import (
    AttributeDescriptor,
    ModelDescriptor,
    RelationDescriptor,
    ToManyRelationDescriptor,
    ToOneRelationDescriptor,
)
from .utils import english_enumerate, is_plain_sequence

logger = logging.getLogger(__name__)

Target = typing.Union[str, typing.Type["Model"]]


@dataclasses.dataclass(frozen=True)
class One:
    """
    Declares a relation to a single instance of ``target``.
    """

    target: Target


@dataclasses.dataclass(frozen=True)
class Many:
    """
    Declares a relation to an ordered collection of ``target`` instances.
    """

    target: Target


TypesDeclaration = typing.Sequence[typing.Tuple[typing.Union[str, typing.Sequence[str]], str]]


@dataclasses.dataclass
class Meta:
    name: typing.Optional[str] = None
    attributes: typing.Sequence[str] = ()
    relations: typing.Mapping[str, typing.Union[One, Many]] = dataclasses.field(
        default_factory=dict
    )
    types: TypesDeclaration = ()
    mapping: typing.Mapping[str, str] = dataclasses.field(default_factory=dict)


def handle_meta(meta: typing.Optional[typing.Type]) -> Meta:
    attrs = {k: v for k, v in vars(meta).items() if not k.startswith("__")} if meta else {}
    unknown = sorted(set(attrs) - {f.name for f in dataclasses.fields(Meta)})
    if unknown:
        raise InvalidDeclarationError(f"unknown Meta declarations: {english_enumerate(unknown)}")

    attributes = attrs.get("attributes", ())
    if isinstance(attributes, str):
        raise InvalidDeclarationError("attributes must be a sequence of names, not a string")

    relations = attrs.get("relations", {})
    if not isinstance(relations, collections.abc.Mapping):
        raise InvalidDeclarationError("relations must be a mapping of names to One or Many")

    types = attrs.get("types", ())
    for entry in types:
        if not is_plain_sequence(entry) or len(entry) != 2 or not isinstance(entry[1], str):
            raise InvalidDeclarationError(f"invalid types entry: {entry!r}")

    return Meta(
        name=attrs.get("name"),
        attributes=list(attributes),
        relations=dict(relations),
        types=list(types),
        mapping=dict(attrs.get("mapping", {})),
    )


class ModelRegistry:
    """
    Keeps track of the concrete model classes by their names, so that relations
    and links can refer to a model before its class is defined.
    """

    _models: typing.Dict[str, typing.Type["Model"]]

    def register(self, name: str, model_class: typing.Type["Model"]) -> None:
        if name in self._models and self._models[name] is not model_class:
            logger.debug("model %s is redefined by %r", name, model_class)
        self._models[name] = model_class

    def lookup(self, name: str) -> typing.Type["Model"]:
        try:
            return self._models[name]
        except KeyError:
            raise UnknownModelError(name)

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __init__(self):
        self._models = {}


registry = ModelRegistry()


def _build_target(
    target: Target,
) -> typing.Union[typing.Type["Model"], Deferred[typing.Type["Model"]]]:
    if isinstance(target, str):
        return Deferred(registry.lookup, target)
    if not isinstance(target, type):
        raise InvalidDeclarationError(f"relation target must be a model class or name: {target!r}")
    return target


def _build_relation(name: str, decl: typing.Any) -> RelationDescriptor:
    if isinstance(decl, One):
        return ToOneRelationDescriptor(_build_target(decl.target), name)
    elif isinstance(decl, Many):
        return ToManyRelationDescriptor(_build_target(decl.target), name)
    else:
        raise InvalidDeclarationError(f"relation {name} must be declared with One or Many")


def build_descriptor(default_name: str, meta: Meta) -> ModelDescriptor:
    attributes = [AttributeDescriptor(name) for name in dict.fromkeys(meta.attributes)]
    relations = [_build_relation(name, decl) for name, decl in meta.relations.items()]

    members = set(meta.attributes) | set(meta.relations)
    dangling = [alias for alias, name in meta.mapping.items() if name not in members]
    if dangling:
        raise InvalidDeclarationError(
            f"aliases {english_enumerate(dangling)} do not map to a declared member"
        )

    return ModelDescriptor(
        name=meta.name or default_name,
        attributes=attributes,
        relations=relations,
        types=meta.types,
        mapping=meta.mapping,
    )


def declare(model_class: typing.Type["Model"]) -> ModelDescriptor:
    """
    Builds the descriptor of the model class from its inner ``Meta`` class and
    registers the class under the model name.
    """
    descr = build_descriptor(model_class.__name__, handle_meta(getattr(model_class, "Meta", None)))
    registry.register(descr.name, model_class)
    return descr


if typing.TYPE_CHECKING:
    from .model import Model  # noqa: E402
