"""Command handlers for the ZokuZoku editor integration."""

from zokuzoku.commands.service import COMMANDS, CommandHandler
from zokuzoku.commands.views import CommandPreconditionError

__all__ = ['COMMANDS', 'CommandHandler', 'CommandPreconditionError']
