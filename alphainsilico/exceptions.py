"""Error types raised by AlphaInSilico.

All errors derive from ValueError: every one of them is a deterministic
consequence of bad input (an enzyme table, an enzyme name, a series
request or a formula) and is never retried.
"""


class InSilicoError(ValueError):
    """Base class for AlphaInSilico errors."""


class ConfigurationError(InSilicoError):
    """Malformed cleavage rule definition (e.g. multi-residue exception)."""


class UnknownEnzymeError(InSilicoError, KeyError):
    """Requested enzyme name is not in the library."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown digester: {name}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]


class UnknownSeriesError(InSilicoError):
    """Series request does not name a known ion type."""


class ZeroChargeError(InSilicoError):
    """Series request evaluates to a charge of zero."""


class FormulaError(InSilicoError):
    """Empirical formula cannot be parsed or contains an unknown element."""
