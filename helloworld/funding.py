"""Fee estimation and payer funding."""

from __future__ import annotations

from solana.constants import LAMPORTS_PER_SOL
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.core import RPCException, UnconfirmedTxError
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey

from .config import Fallback, Resolution
from .constants import DEFAULT_LAMPORTS_PER_SIGNATURE, FEE_SIGNATURE_MULTIPLIER
from .errors import FundingError
from .rpc import confirm


def lamports_per_signature(client: Client) -> int:
    blockhash = client.get_latest_blockhash().value.blockhash
    message = Message.new_with_blockhash([], Keypair().pubkey(), blockhash)
    fee = client.get_fee_for_message(message).value
    if fee is None:
        return DEFAULT_LAMPORTS_PER_SIGNATURE
    return fee


def estimate_fees(client: Client, size: int) -> int:
    """Rent exemption for a ``size``-byte account plus a budget of signatures."""
    fees = client.get_minimum_balance_for_rent_exemption(size).value
    fees += lamports_per_signature(client) * FEE_SIGNATURE_MULTIPLIER
    return fees


def request_airdrop(client: Client, pubkey: Pubkey, lamports: int) -> None:
    try:
        sig = client.request_airdrop(pubkey, lamports).value
        confirm(client, sig)
    except (RPCException, SolanaRpcException, UnconfirmedTxError) as exc:
        raise FundingError(f"Airdrop of {lamports} lamports to {pubkey} failed: {exc}") from exc


def establish_payer(client: Client, resolution: Resolution[Keypair], size: int) -> Keypair:
    fees = estimate_fees(client, size)
    payer = resolution.value
    if isinstance(resolution, Fallback):
        request_airdrop(client, payer.pubkey(), fees)

    lamports = client.get_balance(payer.pubkey()).value
    if lamports < fees:
        # Only a config keypair should end up here.
        request_airdrop(client, payer.pubkey(), fees - lamports)

    print(
        "Using account",
        str(payer.pubkey()),
        "containing",
        lamports / LAMPORTS_PER_SOL,
        "SOL to pay for fees",
    )
    return payer
