import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


SOLANA_RPC_URL = os.getenv("SOLANA_RPC_URL")
HELIUS_API_KEY = os.getenv("HELIUS_API_KEY")
HELIUS_RPC_URL = f"https://rpc.helius.xyz/?api-key={HELIUS_API_KEY}" if HELIUS_API_KEY else None


def _env_int(name: str, shared: str, default: int) -> int:
    # per-operation override first, then the shared SOLBIRTH_RETRY_* one
    value = os.getenv(f"SOLBIRTH_{name}") or os.getenv(f"SOLBIRTH_{shared}")
    return int(value) if value else default


CONFIG = {
"DEFAULT_RPC_ENDPOINTS": (
    SOLANA_RPC_URL or "https://api.mainnet-beta.solana.com",
    "https://solana-api.projectserum.com",
    "https://api.rpcpool.com",
),


"RPC_TIMEOUT": 30,
"COMMITMENT": "confirmed",


# most RPC nodes cap getSignaturesForAddress at 1000
"SIGNATURE_FETCH_LIMIT": 1000,


"RETRY_GET_SIGNATURES_ATTEMPTS": _env_int("RETRY_GET_SIGNATURES_ATTEMPTS", "RETRY_ATTEMPTS", 5),
"RETRY_GET_SIGNATURES_INITIAL_MS": _env_int("RETRY_GET_SIGNATURES_INITIAL_MS", "RETRY_INITIAL_MS", 500),
"RETRY_GET_SIGNATURES_MAX_MS": _env_int("RETRY_GET_SIGNATURES_MAX_MS", "RETRY_MAX_MS", 8000),


"RETRY_GET_TRANSACTION_ATTEMPTS": _env_int("RETRY_GET_TRANSACTION_ATTEMPTS", "RETRY_ATTEMPTS", 5),
"RETRY_GET_TRANSACTION_INITIAL_MS": _env_int("RETRY_GET_TRANSACTION_INITIAL_MS", "RETRY_INITIAL_MS", 500),
"RETRY_GET_TRANSACTION_MAX_MS": _env_int("RETRY_GET_TRANSACTION_MAX_MS", "RETRY_MAX_MS", 8000),
}


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int
    initial_delay: float  # seconds
    max_delay: float

    def __post_init__(self):
        if self.attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {self.attempts}")
        if self.initial_delay > self.max_delay:
            raise ValueError(
                f"initial_delay ({self.initial_delay}) must not exceed max_delay ({self.max_delay})"
            )


def _policy_from_config(operation: str) -> RetryPolicy:
    return RetryPolicy(
        attempts=CONFIG[f"RETRY_{operation}_ATTEMPTS"],
        initial_delay=CONFIG[f"RETRY_{operation}_INITIAL_MS"] / 1000,
        max_delay=CONFIG[f"RETRY_{operation}_MAX_MS"] / 1000,
    )


RETRY_GET_SIGNATURES = _policy_from_config("GET_SIGNATURES")
RETRY_GET_TRANSACTION = _policy_from_config("GET_TRANSACTION")


def get_retry_delay(attempt: int, policy: RetryPolicy) -> float:
    return min(policy.initial_delay * (2 ** attempt), policy.max_delay)


def get_effective_rpc_endpoints(
    custom_endpoint: Optional[str] = None,
    dedicated: Optional[str] = HELIUS_RPC_URL,
    defaults: tuple = CONFIG["DEFAULT_RPC_ENDPOINTS"],
) -> list[str]:
    """
    Ordered endpoints to try: an explicit override wins outright, otherwise the
    dedicated (Helius) URL goes first followed by the public defaults.
    """
    if custom_endpoint:
        return [custom_endpoint]
    if dedicated:
        return [dedicated] + [url for url in defaults if url != dedicated]
    return list(defaults)
