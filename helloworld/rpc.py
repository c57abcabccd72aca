"""Thin wrappers over the Solana JSON-RPC client."""

from __future__ import annotations

from typing import Optional, Sequence

from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solana.rpc.types import TxOpts
from solders.account import Account
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction


def establish_connection(rpc_url: str) -> Client:
    client = Client(rpc_url, commitment=Confirmed)
    version = client.get_version().value
    print("Connection to cluster established:", rpc_url, version.solana_core)
    return client


def fetch_account(client: Client, pubkey: Pubkey) -> Optional[Account]:
    return client.get_account_info(pubkey).value


def confirm(client: Client, signature: Signature) -> Signature:
    client.confirm_transaction(signature, commitment=Confirmed)
    return signature


def send_and_confirm(
    client: Client,
    instructions: Sequence[Instruction],
    signers: Sequence[Keypair],
) -> Signature:
    """Sign with ``signers`` (the first pays fees), send, and block until confirmed."""
    if not signers:
        raise ValueError("at least one signer is required")
    blockhash = client.get_latest_blockhash().value.blockhash
    tx = Transaction.new_signed_with_payer(
        list(instructions),
        signers[0].pubkey(),
        list(signers),
        blockhash,
    )
    sig = client.send_raw_transaction(
        bytes(tx),
        opts=TxOpts(skip_preflight=False, preflight_commitment=Confirmed),
    ).value
    return confirm(client, sig)
