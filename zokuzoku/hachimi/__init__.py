from zokuzoku.hachimi.service import HachimiIpc
from zokuzoku.hachimi.views import (
	DEFAULT_HACHIMI_IPC_ADDRESS,
	HACHIMI_IPC_PORT,
	HACHIMI_IPC_TIMEOUT,
	UNKNOWN_ERROR_MESSAGE,
	ErrorResponse,
	HachimiCommand,
	HachimiDecodeError,
	HachimiHttpError,
	HachimiIpcError,
	HachimiRemoteError,
	HachimiResponse,
	HachimiResult,
	HachimiTimeoutError,
	HachimiTransportError,
	HelloWorldResponse,
	OkResponse,
	ReloadLocalizedDataCommand,
	StoryGotoBlockCommand,
	parse_command,
	parse_response,
)

__all__ = [
	# Client
	'HachimiIpc',
	# Commands
	'HachimiCommand',
	'StoryGotoBlockCommand',
	'ReloadLocalizedDataCommand',
	'parse_command',
	# Responses
	'HachimiResponse',
	'HachimiResult',
	'OkResponse',
	'ErrorResponse',
	'HelloWorldResponse',
	'parse_response',
	# Errors
	'HachimiIpcError',
	'HachimiTransportError',
	'HachimiTimeoutError',
	'HachimiHttpError',
	'HachimiDecodeError',
	'HachimiRemoteError',
	# Constants
	'DEFAULT_HACHIMI_IPC_ADDRESS',
	'HACHIMI_IPC_PORT',
	'HACHIMI_IPC_TIMEOUT',
	'UNKNOWN_ERROR_MESSAGE',
]
