"""Interactive terminal chat: one line of input is one ``Agent.turn()``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from voo import __version__
from voo._exceptions import ConfigError
from voo.agent import Agent
from voo.config import DEFAULT_MODELS, Provider, Settings
from voo.factory import create_client
from voo.registry import default_registry
from voo.retry import RetryPolicy
from voo.types.chat import AgentErrorKind, AgentReply

logger = logging.getLogger(__name__)

PROMPT = "\x1b[38;5;5mYOU: \x1b[0m"
REPLY_PREFIX = f"\x1b[34mVOO:{__version__}> \x1b[0m"
ERROR_PREFIX = "\x1b[31mError:\x1b[0m "
BANNER = "Chat with VOO (use 'ctrl-c' to quit)\n"
EXIT_COMMANDS = frozenset({"exit", "quit"})


def _positive_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a number, got {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voo", description="Chat with an LLM that can read local files."
    )
    parser.add_argument("--provider", choices=[p.value for p in Provider])
    parser.add_argument("--model", help="Model identifier for the chosen provider")
    parser.add_argument(
        "--root",
        help="Restrict the file tools to this directory (default: no restriction)",
    )
    parser.add_argument("--max-rounds", type=_positive_int, help="Tool rounds allowed per turn")
    parser.add_argument("--timeout", type=_positive_float, help="Seconds to wait for the model")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings) -> Settings:
    """Command-line flags win over environment settings."""
    provider = Provider(args.provider) if args.provider else base.provider
    if args.model:
        model = args.model
    elif provider == base.provider:
        model = base.model
    else:
        model = DEFAULT_MODELS[provider]
    return Settings(
        provider=provider,
        model=model,
        log_level=args.log_level or base.log_level,
        max_rounds=args.max_rounds if args.max_rounds is not None else base.max_rounds,
        timeout=args.timeout if args.timeout is not None else base.timeout,
        max_attempts=base.max_attempts,
        root=args.root or base.root,
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_reply(reply: AgentReply) -> str:
    if not reply.is_error:
        return f"{REPLY_PREFIX}{reply.content}"
    if reply.error_kind is AgentErrorKind.AUTH_EXPIRED:
        return f"{ERROR_PREFIX}{reply.error}\nRefresh your API key and try again."
    return f"{ERROR_PREFIX}{reply.error}"


def chat_loop(
    agent: Agent,
    runner: asyncio.Runner,
    *,
    read: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> None:
    """Read, run a turn, print; until exit, EOF or Ctrl-C."""
    print(BANNER, file=out)
    while True:
        try:
            line = read(PROMPT)
        except EOFError:
            break

        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break

        try:
            reply = runner.run(agent.turn(text))
        except Exception as exc:
            # a bug in one turn must not end the session
            logger.exception("Turn failed")
            print(f"{ERROR_PREFIX}{type(exc).__name__}: {exc}", file=out, flush=True)
            continue
        print(format_reply(reply), file=out, flush=True)

    print("Bye!", file=out)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = resolve_settings(args, Settings.from_env())
    except ConfigError as exc:
        print(f"{ERROR_PREFIX}{exc}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level)

    try:
        client = create_client(
            settings.provider, settings.model, timeout=settings.timeout
        )
    except ConfigError as exc:
        print(f"{ERROR_PREFIX}{exc}", file=sys.stderr)
        return 2

    agent = Agent(
        client,
        default_registry(settings.root),
        max_rounds=settings.max_rounds,
        retry=RetryPolicy(max_attempts=settings.max_attempts),
    )
    logger.info("Using %s model %s", settings.provider, settings.model)

    with asyncio.Runner() as runner:
        try:
            chat_loop(agent, runner)
        except KeyboardInterrupt:
            print("\nBye!")
        finally:
            runner.run(client.aclose())
    return 0


if __name__ == "__main__":
    sys.exit(main())
