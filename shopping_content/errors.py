"""Exceptions raised by the client and parser."""

from __future__ import annotations


class ShoppingContentError(Exception):
    pass


class ClientError(ShoppingContentError, RuntimeError):
    pass


class UnauthenticatedError(ClientError):
    def __init__(self, message: str = "Client is not authenticated."):
        super().__init__(message)


class AuthenticationError(ClientError):
    pass


class DeleteFailedError(ClientError):
    def __init__(self, code: int, message: str = "Delete request failed."):
        super().__init__(message)
        self.code = code


class TransportError(ClientError):
    pass


class ParseError(ShoppingContentError, ValueError):
    pass


class UnrecognizedDocumentError(ParseError):
    def __init__(self, root_name: str):
        super().__init__(f"Unrecognized document kind: <{root_name}>")
        self.root_name = root_name
