"""Locate the deployed hello world program."""

from __future__ import annotations

from pathlib import Path

from solana.rpc.api import Client
from solders.pubkey import Pubkey

from .constants import PROGRAM_KEYPAIR_PATH, PROGRAM_SO_PATH
from .errors import ProgramKeypairError, ProgramNotDeployedError, ProgramNotExecutableError
from .keypairs import read_keypair_file
from .rpc import fetch_account


def _deploy_hint(so_path: str | Path) -> str:
    return f"`solana program deploy {Path(so_path).as_posix()}`"


def load_program_id(
    keypair_path: str | Path = PROGRAM_KEYPAIR_PATH,
    so_path: str | Path = PROGRAM_SO_PATH,
) -> Pubkey:
    """Read the program id from the keypair produced at deploy time.

    Only the public half is used; nothing is signed with it.
    """
    try:
        return read_keypair_file(keypair_path).pubkey()
    except (OSError, ValueError) as exc:
        raise ProgramKeypairError(
            f"Failed to read program keypair at '{keypair_path}' due to error: {exc}. "
            f"Program may need to be deployed with {_deploy_hint(so_path)}"
        ) from exc


def check_program(
    client: Client,
    keypair_path: str | Path = PROGRAM_KEYPAIR_PATH,
    so_path: str | Path = PROGRAM_SO_PATH,
) -> Pubkey:
    program_id = load_program_id(keypair_path, so_path)
    info = fetch_account(client, program_id)
    if info is None:
        if Path(so_path).exists():
            raise ProgramNotDeployedError(f"Program needs to be deployed with {_deploy_hint(so_path)}")
        raise ProgramNotDeployedError("Program needs to be built and deployed")
    if not info.executable:
        raise ProgramNotExecutableError(f"Program {program_id} is not executable")
    print(f"Using program {program_id}")
    return program_id
