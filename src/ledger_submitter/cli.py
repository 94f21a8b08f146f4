"""
cli.py - Command line entry point for the transaction submitter

Runs one batch (--once) or polls the store on an interval until SIGINT/SIGTERM.
Transport failures are logged and retried on the next poll.

Exit codes:
    0  batch(es) completed
    2  batch halted on a transaction needing resign or caller action
    3  fatal condition; operator attention required
    4  node unreachable or returned an unusable body (--once only; polling retries)
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import httpx
from dotenv import load_dotenv
from loguru import logger

from .adapters.network.stellard_rpc import StellardRpcNetwork
from .adapters.persistence.memory_store import InMemoryTransactionStore
from .application.services.submission_orchestrator import SubmissionOrchestrator
from .config.app_config import AppConfig
from .domain.errors import ConfigError, FatalError, InvalidTransition, SubmitterError
from .domain.models.report import BatchReport
from .domain.safety.halt_switch import HaltSwitch
from .utils.shutdown import ShutdownSignal

EXIT_OK = 0
EXIT_HALTED = 2
EXIT_FATAL = 3
EXIT_UNAVAILABLE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger-submitter",
        description="Submit signed, unconfirmed transactions and reconcile their outcome.",
    )
    parser.add_argument("--config", help="Path to settings TOML")
    parser.add_argument("--env-file", default=".env", help="dotenv file with SUBMITTER__* overrides")
    parser.add_argument("--once", action="store_true", help="Process a single batch and exit")
    parser.add_argument("--log-level", default=None, help="Override scheduler.log_level")
    return parser


def load_store(path: str) -> InMemoryTransactionStore:
    store_path = Path(path)
    if not store_path.exists():
        return InMemoryTransactionStore()
    return InMemoryTransactionStore.from_json(store_path.read_text(encoding="utf-8"))


def save_store(store: InMemoryTransactionStore, path: str) -> None:
    Path(path).write_text(store.to_json(), encoding="utf-8")


async def run_batch(cfg: AppConfig, network: StellardRpcNetwork, halt_switch: HaltSwitch) -> BatchReport:
    store = load_store(cfg.store.path)
    orchestrator = SubmissionOrchestrator(
        cfg.signing,
        store,
        network,
        legacy_fail_band=cfg.classifier.legacy_fail_band,
        halt_switch=halt_switch,
    )
    try:
        report = await orchestrator.submit_pending()
    finally:
        # Persist whatever was settled before a halt or fatal error.
        save_store(store, cfg.store.path)

    if report.halted_on is not None:
        logger.warning(f"HALTED | {orchestrator.describe_halt(report.halted_on.outcome)}")
    return report


async def run(cfg: AppConfig, once: bool, stop: Optional[ShutdownSignal] = None) -> int:
    own_signals = stop is None
    stop = stop or ShutdownSignal()
    if own_signals:
        stop.install()
    halt_switch = HaltSwitch()
    try:
        async with StellardRpcNetwork(cfg.network.rpc_url, timeout_seconds=cfg.network.timeout_seconds) as network:
            while True:
                try:
                    report = await run_batch(cfg, network, halt_switch)
                except FatalError as exc:
                    logger.error(f"FATAL | {exc} | operator attention required")
                    return EXIT_FATAL
                except InvalidTransition as exc:
                    logger.error(f"FATAL | store rejected transition {exc} | operator attention required")
                    return EXIT_FATAL
                except (httpx.HTTPError, SubmitterError) as exc:
                    # Nothing is latched; the next poll retries from the saved store.
                    logger.warning(f"RPC_UNAVAILABLE | {type(exc).__name__} | {exc}")
                    if once:
                        return EXIT_UNAVAILABLE
                else:
                    if once:
                        return EXIT_OK if report.completed else EXIT_HALTED

                if stop.stopping or await stop.wait(cfg.scheduler.interval_seconds):
                    return EXIT_OK
    finally:
        if own_signals:
            stop.uninstall()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv(args.env_file)

    logger.remove()
    sink_id = logger.add(sys.stderr, level=(args.log_level or "INFO").upper())
    try:
        cfg = AppConfig.load(args.config)
    except ConfigError as exc:
        logger.error(f"CONFIG | invalid | {exc}")
        return EXIT_FATAL

    if not args.log_level:
        logger.remove(sink_id)
        logger.add(sys.stderr, level=cfg.scheduler.log_level)

    return asyncio.run(run(cfg, once=args.once))


if __name__ == "__main__":
    raise SystemExit(main())
