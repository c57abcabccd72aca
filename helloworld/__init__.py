"""Client for the hello world Solana program."""
