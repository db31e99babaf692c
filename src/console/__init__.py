"""
Auction Console

Text menus and command dispatch over the auction catalog.
"""

from .session import Session
from .dispatcher import CommandDispatcher, CommandResult
from .app import ConsoleApp, main

__all__ = [
    'Session',
    'CommandDispatcher',
    'CommandResult',
    'ConsoleApp',
    'main',
]
