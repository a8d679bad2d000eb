"""ZokuZoku: editor-side tooling that drives the Hachimi companion process over local IPC."""

from zokuzoku.commands import CommandHandler, CommandPreconditionError
from zokuzoku.config import DecryptionConfig, ZokuZokuConfig, load_config, save_config
from zokuzoku.hachimi import (
	HachimiDecodeError,
	HachimiHttpError,
	HachimiIpc,
	HachimiIpcError,
	HachimiRemoteError,
	HachimiTimeoutError,
	HachimiTransportError,
	ReloadLocalizedDataCommand,
	StoryGotoBlockCommand,
)

__all__ = [
	'HachimiIpc',
	'StoryGotoBlockCommand',
	'ReloadLocalizedDataCommand',
	'HachimiIpcError',
	'HachimiTransportError',
	'HachimiTimeoutError',
	'HachimiHttpError',
	'HachimiDecodeError',
	'HachimiRemoteError',
	'CommandHandler',
	'CommandPreconditionError',
	'ZokuZokuConfig',
	'DecryptionConfig',
	'load_config',
	'save_config',
]
