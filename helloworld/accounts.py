"""Greeting account derivation and provisioning."""

from __future__ import annotations

from solana.rpc.api import Client
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountWithSeedParams, create_account_with_seed

from .constants import GREETING_SEED, MAX_SEED_LEN
from .rpc import fetch_account, send_and_confirm


def check_seed(seed: str) -> str:
    if not seed:
        raise ValueError("seed must not be empty")
    if len(seed.encode("utf-8")) > MAX_SEED_LEN:
        raise ValueError(f"seed must be at most {MAX_SEED_LEN} bytes")
    return seed


def derive_greeting_address(payer: Pubkey, program_id: Pubkey, seed: str = GREETING_SEED) -> Pubkey:
    """Address owned by ``program_id`` at ``sha256(payer || seed || program_id)``.

    Pure: the same inputs always give the same address, so nothing needs to be
    recorded between runs.
    """
    return Pubkey.create_with_seed(payer, check_seed(seed), program_id)


def create_greeting_account_instruction(
    payer: Pubkey,
    greeted: Pubkey,
    program_id: Pubkey,
    lamports: int,
    space: int,
    seed: str = GREETING_SEED,
):
    return create_account_with_seed(
        CreateAccountWithSeedParams(
            from_pubkey=payer,
            to_pubkey=greeted,
            base=payer,
            seed=check_seed(seed),
            lamports=lamports,
            space=space,
            owner=program_id,
        )
    )


def ensure_greeting_account(
    client: Client,
    payer: Keypair,
    program_id: Pubkey,
    space: int,
    seed: str = GREETING_SEED,
) -> Pubkey:
    greeted = derive_greeting_address(payer.pubkey(), program_id, seed)
    if fetch_account(client, greeted) is not None:
        return greeted

    print("Creating account", str(greeted), "to say hello to")
    lamports = client.get_minimum_balance_for_rent_exemption(space).value
    ix = create_greeting_account_instruction(
        payer.pubkey(),
        greeted,
        program_id,
        lamports,
        space,
        seed,
    )
    send_and_confirm(client, [ix], [payer])
    return greeted
