# solbirth/errors.py
from typing import Optional


class AppError(Exception):
    """Base of every failure kind the resolver reports."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class NoRecordsFound(AppError):
    def __init__(self, identifier: str):
        super().__init__(
            f"No signatures found for program: {identifier}. "
            "Signature fetch might have failed or the program has no transactions."
        )
        self.identifier = identifier


class RecordNotFound(AppError):
    def __init__(self, handle: str):
        super().__init__(f"Transaction {handle} not found by RPC node.")
        self.handle = handle


class MissingTimestamp(AppError):
    def __init__(self, handle: str):
        super().__init__(f"Block time is missing from the transaction for signature: {handle}.")
        self.handle = handle


class RpcMaxRetriesExceeded(AppError):
    def __init__(self, operation: str, cause: Optional[BaseException]):
        message = f"RPC operation '{operation}' failed after maximum retries."
        if cause is not None and str(cause):
            message += f" Last error: {cause}"
        super().__init__(message)
        self.operation = operation
        # kept as a field; callers read it directly instead of __cause__
        self.cause = cause


class AllEndpointsFailed(AppError):
    def __init__(self, last_failure: Optional[BaseException]):
        if last_failure is None:
            message = "All configured RPC endpoints failed (no endpoints were tried)."
        else:
            message = (
                "All configured RPC endpoints failed to retrieve the deployment timestamp. "
                f"Last error: {describe_error(last_failure)}"
            )
        super().__init__(message)
        self.last_failure = last_failure


class InvalidIdentifier(AppError):
    def __init__(self, identifier: str, cause: Optional[BaseException] = None):
        message = f"Invalid program ID format: {identifier}."
        if cause is not None and str(cause):
            message += f" Underlying error: {cause}"
        super().__init__(message)
        self.identifier = identifier
        self.cause = cause


def describe_error(err: BaseException) -> str:
    """`Kind - message` for taxonomy errors, the bare text for anything else."""
    if isinstance(err, AppError):
        return f"{err.kind} - {err.message}"
    return str(err) or type(err).__name__
