"""Newtype deriving for dataclasses: forward behaviour to a wrapped value, directly or via an inner type."""

__version__ = "0.1.0"