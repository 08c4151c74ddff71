import argparse
import asyncio
import traceback
from datetime import datetime, timezone
from typing import Optional, Sequence

from solbirth.chain.rpc import parse_program_id
from solbirth.config import get_effective_rpc_endpoints
from solbirth.errors import AllEndpointsFailed, AppError, describe_error
from solbirth.failover import resolve_first_timestamp
from solbirth.util.log import ConsoleLog, mask_url


def format_block_time(block_time: int) -> str:
    dt = datetime.fromtimestamp(block_time, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="solbirth",
        description="Fetches the first deployment timestamp of a Solana program ID.",
    )
    p.add_argument("program_id", help="Solana program ID to query")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Enable verbose logging for debugging and detailed process information.")
    p.add_argument("-e", "--endpoint", help="Specify a custom Solana RPC endpoint URL.")
    return p


async def run(program_id: str, endpoint: Optional[str], log: ConsoleLog) -> int:
    parse_program_id(program_id)

    endpoints = get_effective_rpc_endpoints(endpoint)
    log.log("Effective RPC endpoints to try:", [mask_url(u) for u in endpoints])

    try:
        block_time = await resolve_first_timestamp(program_id, endpoints, log=log)
    except AllEndpointsFailed as e:
        log.fatal("All configured RPC endpoints failed to retrieve the deployment timestamp.")
        last = e.last_failure
        if last is None:
            log.error("No specific error message from last attempt, check logs if verbose mode was on.")
        else:
            log.error(f"Last error encountered: {describe_error(last)}")
            if log.verbose:
                log.debug("Last error stack trace:", "".join(traceback.format_exception(type(last), last, last.__traceback__)))
        return 1

    log.result(format_block_time(block_time))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log = ConsoleLog(verbose=args.verbose)
    log.log("CLI started with options:", {
        "program_id": args.program_id,
        "verbose": args.verbose,
        "endpoint": mask_url(args.endpoint) if args.endpoint else "(effective list will be used)",
    })
    try:
        return asyncio.run(run(args.program_id, args.endpoint, log))
    except AppError as e:
        log.fatal(f"{e.kind}: {e.message}")
        return 1
    except Exception as e:
        log.fatal(f"An unexpected error occurred: {describe_error(e)}")
        if log.verbose:
            log.debug("Stack trace:", "".join(traceback.format_exception(type(e), e, e.__traceback__)))
        return 1


def console_main():
    raise SystemExit(main())
