"""Connect, fund, check program, say hello and read the greeting back."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from solana.rpc.api import Client
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .accounts import derive_greeting_address, ensure_greeting_account
from .config import load_solana_cli_config, resolve_rpc_url
from .constants import DEFAULT_MESSAGE, GREETING_SEED, PROGRAM_KEYPAIR_PATH, PROGRAM_SO_PATH
from .errors import GreetedAccountNotFoundError
from .funding import establish_payer
from .keypairs import resolve_payer
from .program import check_program
from .rpc import establish_connection, fetch_account, send_and_confirm
from .schema import TEXT_LAYOUT, GreetingLayout


@dataclass(frozen=True)
class Options:
    rpc_url: Optional[str] = None
    cluster: Optional[str] = None
    payer: Optional[str] = None
    config_path: Optional[str] = None
    program_keypair: str | Path = PROGRAM_KEYPAIR_PATH
    program_so: str | Path = PROGRAM_SO_PATH
    layout: GreetingLayout = TEXT_LAYOUT
    seed: str = GREETING_SEED
    message: Any = DEFAULT_MESSAGE


@dataclass(frozen=True)
class Session:
    """Handles resolved once at startup and shared by every later step."""

    client: Client
    payer: Keypair
    program_id: Pubkey
    greeted_pubkey: Pubkey
    layout: GreetingLayout


def _connect(options: Options) -> tuple[Client, dict[str, str]]:
    config = load_solana_cli_config(options.config_path)
    rpc_url = resolve_rpc_url(config, options.rpc_url, options.cluster, options.config_path).value
    return establish_connection(rpc_url), config


def open_session(options: Options) -> Session:
    client, config = _connect(options)
    payer = establish_payer(client, resolve_payer(config, options.payer), options.layout.size)
    program_id = check_program(client, options.program_keypair, options.program_so)
    greeted = ensure_greeting_account(
        client,
        payer,
        program_id,
        options.layout.size,
        options.seed,
    )
    return Session(
        client=client,
        payer=payer,
        program_id=program_id,
        greeted_pubkey=greeted,
        layout=options.layout,
    )


def attach_session(options: Options) -> Session:
    """Like :func:`open_session` but read-only: no airdrop, no account creation."""
    client, config = _connect(options)
    payer = resolve_payer(config, options.payer).value
    program_id = check_program(client, options.program_keypair, options.program_so)
    return Session(
        client=client,
        payer=payer,
        program_id=program_id,
        greeted_pubkey=derive_greeting_address(payer.pubkey(), program_id, options.seed),
        layout=options.layout,
    )


def hello_instruction(session: Session, value: Any) -> Instruction:
    data = session.layout.encode(value) if session.layout.carries_payload else b""
    return Instruction(
        session.program_id,
        data,
        [AccountMeta(session.greeted_pubkey, False, True)],
    )


def say_hello(session: Session, value: Any) -> None:
    # Encode before printing so an oversized greeting fails without noise.
    ix = hello_instruction(session, value)
    print("Saying hello to", str(session.greeted_pubkey))
    send_and_confirm(session.client, [ix], [session.payer])


def report_greetings(session: Session) -> Any:
    print("Retrieving greeting from account")
    info = fetch_account(session.client, session.greeted_pubkey)
    if info is None:
        raise GreetedAccountNotFoundError(
            f"Cannot find the greeted account {session.greeted_pubkey}; "
            "say hello first with `helloworld run`"
        )
    value = session.layout.decode(info.data)
    if session.layout.carries_payload:
        print("Account", str(session.greeted_pubkey), "has been sent message:", value)
    else:
        print(str(session.greeted_pubkey), "has been greeted", value, "time(s)")
    return value


def run(options: Options) -> Any:
    if options.layout.carries_payload:
        options.layout.encode(options.message)
    session = open_session(options)
    say_hello(session, options.message)
    return report_greetings(session)
