"""HTTP client for the Hachimi companion process.

Hachimi listens on a fixed local port and accepts one JSON command per POST.
Each call is a single attempt: no retries, no deduplication.
"""

import asyncio
import ipaddress
import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from zokuzoku.hachimi.views import (
	DEFAULT_HACHIMI_IPC_ADDRESS,
	HACHIMI_IPC_PORT,
	HACHIMI_IPC_TIMEOUT,
	ErrorResponse,
	HachimiDecodeError,
	HachimiHttpError,
	HachimiRemoteError,
	HachimiResult,
	HachimiTimeoutError,
	HachimiTransportError,
	ReloadLocalizedDataCommand,
	StoryGotoBlockCommand,
	parse_response,
)

if TYPE_CHECKING:
	from zokuzoku.config import ZokuZokuConfig

logger = logging.getLogger(__name__)


class HachimiIpc:
	"""Client for the Hachimi IPC endpoint.

	One instance owns one pooled httpx.AsyncClient and may be shared by concurrent
	callers. The target address is fixed for the lifetime of the instance; build a
	new client to talk to a different host.
	"""

	def __init__(
		self,
		address: str = DEFAULT_HACHIMI_IPC_ADDRESS,
		timeout: float = HACHIMI_IPC_TIMEOUT,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self._address = address
		self._port = HACHIMI_IPC_PORT
		self.timeout = timeout
		self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

	@classmethod
	def from_config(cls, config: 'ZokuZokuConfig') -> 'HachimiIpc':
		return cls(address=config.hachimi_ipc_address)

	@property
	def address(self) -> str:
		return self._address

	@property
	def port(self) -> int:
		return self._port

	@property
	def url(self) -> str:
		host = self._address
		try:
			if ipaddress.ip_address(host).version == 6:
				host = f'[{host}]'
		except ValueError:
			pass  # hostname or IPv4
		return f'http://{host}:{self._port}/'

	async def call(self, command: StoryGotoBlockCommand | ReloadLocalizedDataCommand) -> HachimiResult:
		"""Send a command to Hachimi and return its response.

		Args:
			command: The command to send

		Returns:
			OkResponse or HelloWorldResponse. An Error response is never returned.

		Raises:
			HachimiTimeoutError: The round trip exceeded the timeout
			HachimiTransportError: No complete HTTP response was received
			HachimiHttpError: Non-2xx status
			HachimiDecodeError: Body is not a known response
			HachimiRemoteError: Hachimi replied with an Error response
		"""
		url = self.url
		payload = command.model_dump_json()
		logger.debug(f'➡️ Hachimi {command.type} -> {url}: {payload}')

		try:
			# wait_for gives an absolute deadline; httpx timeouts only bound each phase
			response = await asyncio.wait_for(
				self.client.post(url, content=payload, headers={'Content-Type': 'application/json'}),
				timeout=self.timeout,
			)
		except (asyncio.TimeoutError, httpx.TimeoutException) as e:
			raise HachimiTimeoutError(f'Timed out after {self.timeout}s waiting for Hachimi at {url}') from e
		except (httpx.RequestError, httpx.InvalidURL) as e:
			raise HachimiTransportError(f'Failed to reach Hachimi at {url}: {e}') from e

		if not response.is_success:
			raise HachimiHttpError(response.status_code)

		try:
			result = parse_response(response.content)
		except ValidationError as e:
			raise HachimiDecodeError(f'Invalid response from Hachimi: {e}') from e

		logger.debug(f'⬅️ Hachimi {command.type}: {result.type}')

		if isinstance(result, ErrorResponse):
			raise HachimiRemoteError(result.message)
		return result

	async def call_with_progress(
		self, command: StoryGotoBlockCommand | ReloadLocalizedDataCommand, title: str | None = None
	) -> HachimiResult:
		"""Same as call(), with start and finish lines logged for the user. Nothing extra goes over the wire."""
		title = title or command.type
		logger.info(f'⏳ {title}...')
		result = await self.call(command)
		logger.info(f'✅ {title} done')
		return result

	async def close(self) -> None:
		await self.client.aclose()

	async def __aenter__(self) -> 'HachimiIpc':
		return self

	async def __aexit__(self, exc_type, exc, tb) -> None:
		await self.close()
