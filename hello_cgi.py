#!/usr/bin/env python3
import os
import sys
from typing import BinaryIO, Mapping, Optional, TextIO

from gateway.http_request import ENCODING, RequestEnvironment, read_body, requires_body
from gateway.http_response import ResponseContext, log, on_error, write_response
from gateway.outcome import Failure, attempt


def handle_request(environment: RequestEnvironment, stdin: BinaryIO, context: ResponseContext) -> None:
    log(f"{environment.method} {environment.script_name}")

    body = None
    if requires_body(environment.method):
        read = attempt(read_body, stdin)
        if isinstance(read, Failure):
            on_error(context, read.error)
            return

        body = read.value
        log(f"Read request body: {len(body)} characters")

    written = attempt(write_response, context, environment, body)
    if isinstance(written, Failure):
        on_error(context, written.error)


def utf8_stdout() -> TextIO:
    # The header block always declares charset=UTF-8, whatever the host locale is
    sys.stdout.reconfigure(encoding=ENCODING, newline="\n")
    return sys.stdout


def main(environ: Optional[Mapping[str, str]] = None, stdin: Optional[BinaryIO] = None, stdout: Optional[TextIO] = None) -> int:
    environ = os.environ if environ is None else environ
    stdin = sys.stdin.buffer if stdin is None else stdin
    stdout = utf8_stdout() if stdout is None else stdout

    context = ResponseContext(output=stdout)

    # Building the environment can fail too, the header gate still applies
    loaded = attempt(RequestEnvironment, environ)
    if isinstance(loaded, Failure):
        on_error(context, loaded.error)
    else:
        handle_request(loaded.value, stdin, context)

    flushed = attempt(stdout.flush)
    if isinstance(flushed, Failure):
        on_error(context, flushed.error)

    return 0


if __name__ == "__main__":
    sys.exit(main())
