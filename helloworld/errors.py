"""Errors raised by the helloworld client."""


class HelloWorldError(Exception):
    """Base class for fatal client errors."""


class FundingError(HelloWorldError):
    """Raised when the faucet cannot fund the payer."""


class ProgramKeypairError(HelloWorldError):
    """Raised when the program keypair file cannot be read."""


class ProgramNotDeployedError(HelloWorldError):
    """Raised when the program has no on-chain account."""


class ProgramNotExecutableError(HelloWorldError):
    """Raised when the program account exists but is not executable."""


class GreetedAccountNotFoundError(HelloWorldError):
    """Raised when the greeting account is missing at read time."""


class SchemaError(HelloWorldError):
    """Raised when a greeting does not fit its fixed-size layout."""
