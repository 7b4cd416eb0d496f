"""Errors raised by the EdDSA-Poseidon package."""

from __future__ import annotations


class EdDSAPoseidonError(Exception):
    pass


class TypeCoercionError(EdDSAPoseidonError, TypeError):
    """An input is not one of the accepted surface types."""


class InvalidPointError(EdDSAPoseidonError, ValueError):
    """A point is not on Baby Jubjub or does not decompress to one."""


class InvalidPublicKeyError(InvalidPointError):
    pass


class InvalidSignatureError(InvalidPointError):
    pass


class LengthError(EdDSAPoseidonError, ValueError):
    pass
