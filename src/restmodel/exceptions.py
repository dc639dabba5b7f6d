import abc
import typing


class RestModelException(Exception, metaclass=abc.ABCMeta):
    message: str

    def __str__(self):
        return self.message


class InvalidDeclarationError(RestModelException):
    message: str

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownModelError(RestModelException):
    name: str

    @property
    def message(self):
        return f'no model known as "{self.name}"'

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class ModelError(RestModelException, metaclass=abc.ABCMeta):
    """
    The base class for errors raised against a particular model instance.
    """

    model: "model.Model"

    @property
    def model_name(self) -> str:
        return self.model.get_name()

    def __init__(self, model: "model.Model"):
        super().__init__(model)
        self.model = model


class InvalidAttributesError(ModelError):
    actual: typing.Any

    @property
    def message(self):
        return f"Invalid attributes for [{self.model_name}]"

    def __init__(self, model: "model.Model", actual: typing.Any):
        super().__init__(model)
        self.actual = actual


class RequiredAttributeMissingError(ModelError):
    attribute: str

    @property
    def message(self):
        return f"[{self.attribute}] is required for [{self.model_name}]"

    def __init__(self, model: "model.Model", attribute: str):
        super().__init__(model)
        self.attribute = attribute


class UnknownPropertyError(ModelError, AttributeError):
    name: str

    @property
    def message(self):
        return f"Getting unknown property: {self.model_name}::{self.name}"

    def __init__(self, model: "model.Model", name: str):
        super().__init__(model)
        self.name = name


class UnresolvableLinkError(RestModelException):
    link: "links.Link"
    detail: str

    @property
    def message(self):
        return f"link {self.link.href} cannot be resolved ({self.detail})"

    def __init__(self, link: "links.Link", detail: str):
        super().__init__(link)
        self.link = link
        self.detail = detail


if typing.TYPE_CHECKING:
    from . import links  # noqa: E402
    from . import model  # noqa: E402
