"""Wire types for the Hachimi IPC protocol.

Commands and responses are tagged unions: the ``type`` field names the variant
and the variant's own fields sit flat next to it.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

HACHIMI_IPC_PORT = 50433
HACHIMI_IPC_TIMEOUT = 30.0  # seconds, full round trip
DEFAULT_HACHIMI_IPC_ADDRESS = '127.0.0.1'
UNKNOWN_ERROR_MESSAGE = 'Unknown error'

U32_MAX = 2**32 - 1


# Commands
class StoryGotoBlockCommand(BaseModel):
	"""Jump the running story to a block.

	Args:
	    block_id: Index of the target block
	    incremental: Step from the current block instead of restarting the story
	"""

	model_config = ConfigDict(extra='forbid', frozen=True)

	type: Literal['StoryGotoBlock'] = 'StoryGotoBlock'
	block_id: int = Field(ge=0, le=U32_MAX)
	incremental: bool


class ReloadLocalizedDataCommand(BaseModel):
	"""Ask Hachimi to reload localized data from disk."""

	model_config = ConfigDict(extra='forbid', frozen=True)

	type: Literal['ReloadLocalizedData'] = 'ReloadLocalizedData'


HachimiCommand = Annotated[StoryGotoBlockCommand | ReloadLocalizedDataCommand, Field(discriminator='type')]


# Responses
class OkResponse(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: Literal['Ok'] = 'Ok'


class ErrorResponse(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: Literal['Error'] = 'Error'
	message: str | None = None


class HelloWorldResponse(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: Literal['HelloWorld'] = 'HelloWorld'
	message: str


HachimiResponse = Annotated[OkResponse | ErrorResponse | HelloWorldResponse, Field(discriminator='type')]

# What HachimiIpc.call can hand back; ErrorResponse is always raised instead
HachimiResult = OkResponse | HelloWorldResponse

_command_adapter = TypeAdapter(HachimiCommand)
_response_adapter = TypeAdapter(HachimiResponse)


def parse_command(data: str | bytes) -> StoryGotoBlockCommand | ReloadLocalizedDataCommand:
	"""Validate a JSON command payload. Raises pydantic.ValidationError on unknown tags or bad fields."""
	return _command_adapter.validate_json(data)


def parse_response(data: str | bytes) -> OkResponse | ErrorResponse | HelloWorldResponse:
	"""Validate a JSON response payload. Raises pydantic.ValidationError on unknown tags or bad fields."""
	return _response_adapter.validate_json(data)


# Errors
class HachimiIpcError(Exception):
	"""Base class for every failure of a Hachimi IPC call."""

	pass


class HachimiTransportError(HachimiIpcError):
	"""No complete HTTP response was received (connection refused, reset, ...)."""

	pass


class HachimiTimeoutError(HachimiTransportError):
	"""The round trip did not finish before the deadline. The remote outcome is unknown."""

	pass


class HachimiHttpError(HachimiIpcError):
	"""Hachimi answered with a non-2xx status. The body is not interpreted."""

	def __init__(self, status_code: int):
		self.status_code = status_code
		super().__init__(f'HTTP error: {status_code}')


class HachimiDecodeError(HachimiIpcError):
	"""The response body is not a known Hachimi response."""

	pass


class HachimiRemoteError(HachimiIpcError):
	"""Hachimi handled the request and reported a failure."""

	def __init__(self, message: str | None = None):
		self.message = message if message is not None else UNKNOWN_ERROR_MESSAGE
		super().__init__(self.message)
