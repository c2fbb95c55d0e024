"""
Responsibility: expose the CGI request environment as a read-only mapping and
read the request body from stdin for methods that carry one.

The host server closes stdin after CONTENT_LENGTH bytes, so reading until EOF
is the whole framing contract here.
"""
from types import MappingProxyType
from typing import BinaryIO, Final, List, Mapping

BODY_METHODS: Final[List[str]] = ["POST", "PUT", "PATCH"]
DEFAULT_METHOD: Final[str] = "GET"
RECV_BUFFER_SIZE: Final[int] = 4096
ENCODING: Final[str] = "utf-8"


class RequestEnvironment(Mapping[str, str]):
    """
    Read-only view of the variables the host server passed to this process
    """

    def __init__(self, environ: Mapping[str, str]) -> None:
        self._variables = MappingProxyType(dict(environ))

    def __getitem__(self, key: str) -> str:
        return self._variables[key]

    def __iter__(self):
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    @property
    def method(self) -> str:
        return self._variables.get("REQUEST_METHOD", DEFAULT_METHOD)

    @property
    def script_name(self) -> str:
        return self._variables.get("SCRIPT_NAME", "")


def requires_body(method: str) -> bool:
    return method in BODY_METHODS


def read_body(stream: BinaryIO) -> str:
    # Decode once at the end so multi-byte characters split across chunks survive
    body = b""

    while True:
        received = stream.read(RECV_BUFFER_SIZE)
        if not received:
            break

        body += received

    return body.decode(ENCODING)
