"""
Exceptions raised by the rule mining engine.
"""


class MiningError(Exception):
    """Base class for every error raised by rule_miner."""


class InvalidConfiguration(MiningError, ValueError):
    """A threshold or algorithm tag is outside its allowed domain."""


class InsufficientData(MiningError):
    """Nothing to mine: empty store, empty batch or empty stream."""


class UnsupportedAlgorithm(MiningError):
    """The selected algorithm variant has no engine implementation."""
