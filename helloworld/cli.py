"""CLI entrypoint for the hello world client."""

from __future__ import annotations

import argparse
from typing import Any

from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException, UnconfirmedTxError
from solders.pubkey import Pubkey

from .accounts import derive_greeting_address
from .config import load_solana_cli_config
from .constants import CLUSTER_URLS, DEFAULT_MESSAGE, GREETING_SEED, PROGRAM_KEYPAIR_PATH, PROGRAM_SO_PATH
from .errors import HelloWorldError
from .keypairs import read_keypair_file
from .program import load_program_id
from .schema import LAYOUTS, layout_for, text_capacity
from .workflow import Options, attach_session, report_greetings, run


def _options(args: argparse.Namespace) -> Options:
    layout = layout_for(args.layout)
    message: Any = getattr(args, "message", None)
    if message is not None and not layout.carries_payload:
        raise ValueError(f"--message is not used with --layout {layout.name}")
    if message is None:
        message = DEFAULT_MESSAGE
    return Options(
        rpc_url=args.rpc_url,
        cluster=args.cluster,
        payer=args.payer,
        config_path=args.config,
        program_keypair=args.program_keypair,
        program_so=args.program_so,
        layout=layout,
        seed=args.seed,
        message=message,
    )


def _cmd_run(args: argparse.Namespace) -> int:
    print("Let's say hello to a Solana account...")
    run(_options(args))
    print("Success")
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    report_greetings(attach_session(_options(args)))
    return 0


def _resolve_payer_pubkey(args: argparse.Namespace) -> Pubkey:
    if args.payer_pubkey:
        return Pubkey.from_string(args.payer_pubkey)
    path = args.payer or load_solana_cli_config(args.config).get("keypair_path")
    if not path:
        raise ValueError("address requires --payer-pubkey, --payer or keypair_path in the CLI config")
    return read_keypair_file(path).pubkey()


def _cmd_address(args: argparse.Namespace) -> int:
    payer = _resolve_payer_pubkey(args)
    if args.program_id:
        program_id = Pubkey.from_string(args.program_id)
    else:
        program_id = load_program_id(args.program_keypair, args.program_so)
    print(derive_greeting_address(payer, program_id, args.seed))
    return 0


def _cmd_size(args: argparse.Namespace) -> int:
    layout = layout_for(args.layout)
    print(f"Greeting account size: {layout.size}")
    if layout.name == "text":
        print(f"Message length (bytes): {text_capacity(layout)}")
    return 0


def _add_cluster_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--rpc-url", help="RPC URL override")
    p.add_argument("--cluster", choices=sorted(CLUSTER_URLS), help="Cluster moniker")
    p.add_argument("--config", help="Solana CLI config path")
    p.add_argument("--payer", help="Payer keypair path")


def _add_program_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--program-keypair",
        default=str(PROGRAM_KEYPAIR_PATH),
        help="Program keypair written at deploy time",
    )
    p.add_argument("--program-so", default=str(PROGRAM_SO_PATH), help="Built program shared object")
    p.add_argument("--seed", default=GREETING_SEED, help="Greeting account seed")


def _add_layout_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument("--layout", choices=sorted(LAYOUTS), default="text", help="Greeting account layout")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="helloworld")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Say hello to the greeting account and read it back")
    _add_cluster_args(p_run)
    _add_program_args(p_run)
    _add_layout_arg(p_run)
    p_run.add_argument(
        "--message",
        help=f"Greeting text, text layout only (default: {DEFAULT_MESSAGE!r})",
    )
    p_run.set_defaults(func=_cmd_run)

    p_report = sub.add_parser("report", help="Read the greeting account without saying hello")
    _add_cluster_args(p_report)
    _add_program_args(p_report)
    _add_layout_arg(p_report)
    p_report.set_defaults(func=_cmd_report)

    p_address = sub.add_parser("address", help="Print the derived greeting account address")
    p_address.add_argument("--config", help="Solana CLI config path")
    p_address.add_argument("--payer", help="Payer keypair path")
    p_address.add_argument("--payer-pubkey", help="Payer public key")
    p_address.add_argument("--program-id", help="Program id (default: read from program keypair)")
    _add_program_args(p_address)
    p_address.set_defaults(func=_cmd_address)

    p_size = sub.add_parser("size", help="Print the greeting account size")
    _add_layout_arg(p_size)
    p_size.set_defaults(func=_cmd_size)

    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except FileNotFoundError as exc:
        print(str(exc))
        return 1
    except (HelloWorldError, ValueError) as exc:
        print(str(exc))
        return 1
    except (RPCException, SolanaRpcException, UnconfirmedTxError) as exc:
        print(f"RPC error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
