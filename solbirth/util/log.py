import re
import sys
import traceback

from solbirth.errors import AppError, describe_error


_API_KEY_RE = re.compile(r"(api-key=)[^&]+")


def mask_url(url: str) -> str:
    return _API_KEY_RE.sub(r"\1***", url)


class ConsoleLog:
    """
    Console logger handed to every component that reports progress.
    [LOG]/[DEBUG] only show with verbose on. Every tagged line goes to stderr;
    stdout carries nothing but result().
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def log(self, *args):
        if self.verbose:
            print("[LOG]", *args, file=sys.stderr)

    def debug(self, *args):
        if self.verbose:
            print("[DEBUG]", *args, file=sys.stderr)

    def info(self, *args):
        print("[INFO]", *args, file=sys.stderr)

    def warn(self, *args):
        print("[WARN]", *args, file=sys.stderr)

    def error(self, *args):
        print("[ERROR]", *args, file=sys.stderr)

    def fatal(self, *args):
        print("[FATAL]", *args, file=sys.stderr)

    def result(self, text: str):
        print(text)

    # ---- events emitted by the resolver ----

    def retry_scheduled(self, operation: str, attempt: int, attempts: int, delay: float, error: BaseException, rate_limited: bool = False):
        delay_ms = int(delay * 1000)
        if rate_limited:
            self.warn(f"Rate limit hit on {operation}. Retrying in {delay_ms}ms... (Attempt {attempt + 1}/{attempts})")
        else:
            self.error(f"Error during {operation} on attempt {attempt + 1}: {describe_error(error)}")
            self.warn(f"Retrying {operation} after error in {delay_ms}ms... (Attempt {attempt + 1}/{attempts})")

    def endpoint_attempt_started(self, endpoint: str):
        self.log(f"Attempting to use RPC endpoint: {mask_url(endpoint)}")

    def endpoint_failed(self, endpoint: str, error: BaseException):
        if isinstance(error, AppError):
            self.error(f"Endpoint {mask_url(endpoint)} failed: {describe_error(error)}")
        else:
            self.error(f"Endpoint {mask_url(endpoint)} failed with an unexpected error: {describe_error(error)}")
        if self.verbose:
            self.debug("Stack trace:", "".join(traceback.format_exception(type(error), error, error.__traceback__)))


class NullLog(ConsoleLog):
    """Swallows everything; default when no log is passed in."""

    def __init__(self):
        super().__init__(verbose=False)

    def _drop(self, *args, **kwargs):
        pass

    log = debug = info = warn = error = fatal = _drop
