"""
This package contains the interface definitions of the collaborators the models
rely on, which need to be implemented by the transport-dependent provider.
An implementation on top of ``httpx`` lives in :py:mod:`restmodel.implementations.httpx`.

"""
import abc
import typing


class ResponseEnvelope(metaclass=abc.ABCMeta):
    """
    A :py:class:`ResponseEnvelope` wraps a response returned by the API and
    gives access to its decoded body.  Anything that implements :py:meth:`get_body`
    can be passed to :py:meth:`Model.set_attributes`.
    """

    @abc.abstractmethod
    def get_body(self) -> typing.Any:
        """
        Returns the decoded body of the response.

        :return: The decoded body, usually a mapping or a sequence of mappings.
        """
        ...  # pragma: nocover


class LinkResolver(metaclass=abc.ABCMeta):
    """
    A :py:class:`LinkResolver` follows a :py:class:`Link` to the remote resource
    it points to and builds the model(s) from the fetched representation.
    """

    @abc.abstractmethod
    def resolve(
        self, link: "links.Link"
    ) -> typing.Union["model.Model", typing.Sequence["model.Model"]]:
        """
        Fetches the resource the link points to.

        :param Link link: The link to follow.
        :return: The model built from the fetched resource, or a sequence
                 of models if the resource is a collection.
        """
        ...  # pragma: nocover


if typing.TYPE_CHECKING:
    from . import links  # noqa: E402
    from . import model  # noqa: E402
