import dataclasses
import os
import typing

DEFAULT_TIMEOUT = 30.0


@dataclasses.dataclass
class HttpResolverConfig:
    base_url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    headers: typing.Dict[str, str] = dataclasses.field(default_factory=dict)

    @classmethod
    def from_env(
        cls,
        prefix: str = "RESTMODEL_",
        environ: typing.Optional[typing.Mapping[str, str]] = None,
    ) -> "HttpResolverConfig":
        """
        Reads ``<prefix>BASE_URL``, ``<prefix>TIMEOUT`` and ``<prefix>TOKEN``.
        The token, when set, is sent as a bearer ``Authorization`` header.
        """
        if environ is None:
            environ = os.environ
        headers: typing.Dict[str, str] = {}
        token = environ.get(f"{prefix}TOKEN")
        if token:
            headers["Authorization"] = f"Bearer {token}"
        timeout = environ.get(f"{prefix}TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ValueError(f"{prefix}TIMEOUT must be a number of seconds: {timeout!r}")
        return cls(
            base_url=environ.get(f"{prefix}BASE_URL", ""),
            timeout=timeout_value,
            headers=headers,
        )
