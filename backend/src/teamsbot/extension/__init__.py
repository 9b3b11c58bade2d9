"""Messaging extension handlers: query, selectItem and submitAction."""

from .handler import MessagingExtensionHandler, get_extension_handler

__all__ = ["MessagingExtensionHandler", "get_extension_handler"]
