import importlib

import dotenv
import pytest

from solbirth import config
from solbirth.config import CONFIG, get_effective_rpc_endpoints

DEFAULTS = ("https://a.example", "https://b.example", "https://c.example")
HELIUS = "https://rpc.helius.xyz/?api-key=abc"


def test_custom_endpoint_wins_outright():
    assert get_effective_rpc_endpoints("https://mine.example", dedicated=HELIUS, defaults=DEFAULTS) == ["https://mine.example"]


def test_dedicated_goes_first():
    assert get_effective_rpc_endpoints(dedicated=HELIUS, defaults=DEFAULTS) == [HELIUS, *DEFAULTS]


def test_dedicated_not_repeated():
    defaults = (HELIUS,) + DEFAULTS
    assert get_effective_rpc_endpoints(dedicated=HELIUS, defaults=defaults) == [HELIUS, *DEFAULTS]


def test_public_defaults_only():
    assert get_effective_rpc_endpoints(dedicated=None, defaults=DEFAULTS) == list(DEFAULTS)


def test_stock_defaults():
    assert len(CONFIG["DEFAULT_RPC_ENDPOINTS"]) == 3
    assert CONFIG["SIGNATURE_FETCH_LIMIT"] == 1000


ENV_VARS = [
    "SOLANA_RPC_URL",
    "HELIUS_API_KEY",
    *(f"SOLBIRTH_RETRY_{k}" for k in ("ATTEMPTS", "INITIAL_MS", "MAX_MS")),
    *(f"SOLBIRTH_RETRY_{op}_{k}" for op in ("GET_SIGNATURES", "GET_TRANSACTION") for k in ("ATTEMPTS", "INITIAL_MS", "MAX_MS")),
]


@pytest.fixture
def load_config(monkeypatch):
    """Re-import solbirth.config under a controlled environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of it
    monkeypatch.setattr(dotenv, "load_dotenv", lambda *a, **kw: False)

    def _load(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _load
    monkeypatch.undo()
    importlib.reload(config)


def test_env_public_defaults(load_config):
    cfg = load_config()
    assert cfg.HELIUS_RPC_URL is None
    assert cfg.get_effective_rpc_endpoints() == [
        "https://api.mainnet-beta.solana.com",
        "https://solana-api.projectserum.com",
        "https://api.rpcpool.com",
    ]


def test_env_helius_key_goes_first(load_config):
    cfg = load_config(HELIUS_API_KEY="abc")
    endpoints = cfg.get_effective_rpc_endpoints()
    assert endpoints[0] == "https://rpc.helius.xyz/?api-key=abc"
    assert endpoints[1:] == list(cfg.CONFIG["DEFAULT_RPC_ENDPOINTS"])


def test_env_solana_rpc_url_replaces_first_default(load_config):
    cfg = load_config(SOLANA_RPC_URL="https://mine.example")
    assert cfg.get_effective_rpc_endpoints() == [
        "https://mine.example",
        "https://solana-api.projectserum.com",
        "https://api.rpcpool.com",
    ]


def test_env_override_still_loses_to_cli_endpoint(load_config):
    cfg = load_config(HELIUS_API_KEY="abc")
    assert cfg.get_effective_rpc_endpoints("https://cli.example") == ["https://cli.example"]


def test_env_stock_retry_policies(load_config):
    cfg = load_config()
    for policy in (cfg.RETRY_GET_SIGNATURES, cfg.RETRY_GET_TRANSACTION):
        assert (policy.attempts, policy.initial_delay, policy.max_delay) == (5, 0.5, 8.0)


def test_env_transaction_policy_alone(load_config):
    cfg = load_config(SOLBIRTH_RETRY_GET_TRANSACTION_ATTEMPTS="9")
    assert cfg.RETRY_GET_TRANSACTION.attempts == 9
    assert cfg.RETRY_GET_SIGNATURES.attempts == 5


def test_env_signatures_policy_alone(load_config):
    cfg = load_config(SOLBIRTH_RETRY_GET_SIGNATURES_INITIAL_MS="250")
    assert cfg.RETRY_GET_SIGNATURES.initial_delay == 0.25
    assert cfg.RETRY_GET_TRANSACTION.initial_delay == 0.5


def test_env_shared_retry_values_with_per_operation_override(load_config):
    cfg = load_config(SOLBIRTH_RETRY_MAX_MS="2000", SOLBIRTH_RETRY_GET_SIGNATURES_MAX_MS="4000")
    assert cfg.RETRY_GET_SIGNATURES.max_delay == 4.0
    assert cfg.RETRY_GET_TRANSACTION.max_delay == 2.0
