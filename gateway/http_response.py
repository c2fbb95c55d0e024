"""
Responsibility: write the CGI response to stdout.

Provides the header gate (emit_header), the success page (write_response) and
the terminal error handler (on_error). All three share one ResponseContext so
the header block is written at most once per process.
"""
import sys
import traceback
from dataclasses import dataclass
from typing import Dict, Final, Optional, TextIO

from gateway.http_request import RequestEnvironment

PLAIN: Final[str] = "plain"
HTML: Final[str] = "html"
DEFAULT_HEADER_KIND: Final[str] = PLAIN

# Each header line is followed by the blank line that ends the CGI header block
HTTP_HEADERS: Final[Dict[str, str]] = {
    PLAIN: "Content-Type: text/plain; charset=UTF-8\n\n",
    HTML: "Content-Type: text/html; charset=UTF-8\n\n",
}

PAGE_TITLE: Final[str] = "Hello Python CGI"

HTML_PREAMBLE: Final[str] = f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta http-equiv="X-UA-Compatible" content="IE=Edge">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{PAGE_TITLE}</title>
  </head>
  <body>
"""

HTML_EPILOGUE: Final[str] = """  </body>
</html>
"""


def log(message: str) -> None:
    # stdout carries the response, diagnostics go to the server's error log.
    # A missing or broken error log must never take the response down with it.
    if sys.stderr is None:
        return

    try:
        print(message, file=sys.stderr)
    except (OSError, ValueError):
        pass


@dataclass
class ResponseContext:
    """
    Output stream plus the kind of header already written to it.

    header_state is None until the first emit_header call and never changes
    afterwards.
    """
    output: TextIO
    header_state: Optional[str] = None

    def write(self, text: str) -> None:
        self.output.write(text)

    def header_sent(self) -> bool:
        return self.header_state is not None


def emit_header(context: ResponseContext, kind: str) -> None:
    if context.header_sent():
        return

    if kind not in HTTP_HEADERS:
        kind = DEFAULT_HEADER_KIND

    context.write(HTTP_HEADERS[kind])
    context.header_state = kind


def format_environment(environment: RequestEnvironment) -> str:
    return "\n".join(f"{key}: {environment[key]}" for key in sorted(environment))


def write_response(context: ResponseContext, environment: RequestEnvironment, body: Optional[str] = None) -> None:
    emit_header(context, HTML)

    context.write(HTML_PREAMBLE)

    context.write(f"<h1>{PAGE_TITLE}</h1>\n")
    context.write(f"<pre>\n{format_environment(environment)}\n</pre>\n")

    if body:
        context.write("<hr>\n")
        context.write("<h2>Post Body</h2>\n")
        context.write(f"<pre>{body}</pre>\n")

    # Posts back to this same script so the body path can be tried from a browser
    context.write("<hr>\n")
    context.write("<h2>POST Test</h2>\n")
    context.write(f"""<form action="{environment.script_name}" method="POST">
  <input type="text" name="text" value="">
  <button name="submit-btn" value="submit-btn-value">Post Submit</button>
</form>
""")

    context.write(HTML_EPILOGUE)


def format_error(error: BaseException) -> str:
    return f"{type(error).__name__}: {error}"


def on_error(context: ResponseContext, error: BaseException) -> None:
    try:
        if not context.header_sent():
            emit_header(context, PLAIN)

        if context.header_state == HTML:
            context.write(f'<pre style="color: #f00; font-weight: bold;">Error:<br>{format_error(error)}</pre>\n')
        else:
            context.write(f"\nError: {format_error(error)}\n")
    except Exception as e:
        # Nothing left to report to but the error log
        log(f"Error writing error response: {e}")

    log("Unhandled error:\n" + "".join(traceback.format_exception(type(error), error, error.__traceback__)))
