"""Editor command handlers.

Turns user intent into Hachimi commands and config changes. Parameters are
checked here so that a command with missing context never reaches the IPC client.
"""

import logging
import shutil
from pathlib import Path
from typing import Any

from zokuzoku.commands.views import CommandPreconditionError
from zokuzoku.config import ZokuZokuConfig, get_cache_dir, load_config, save_config
from zokuzoku.hachimi.service import HachimiIpc
from zokuzoku.hachimi.views import HachimiResult, ReloadLocalizedDataCommand, StoryGotoBlockCommand
from zokuzoku.utils import normalize_story_id

logger = logging.getLogger(__name__)

COMMANDS = {
	'enable',
	'reload-localized-data',
	'story-goto-block',
	'open-localize-dict-editor',
	'open-story-editor',
	'open-mdb-editor',
	'open-lyrics-editor',
	'set-localized-data-dir',
	'revert-localized-data-dir',
	'clear-cache',
}


class CommandHandler:
	def __init__(self, ipc: HachimiIpc, config: ZokuZokuConfig | None = None, config_path: Path | None = None):
		self.ipc = ipc
		self.config_path = config_path
		self.config = config if config is not None else load_config(config_path)

	def _update_config(self, **changes: Any) -> Path:
		self.config = ZokuZokuConfig.model_validate({**self.config.model_dump(), **changes})
		return save_config(self.config, self.config_path)

	async def enable(self) -> dict[str, Any]:
		path = self._update_config(enabled=True)
		logger.info('ZokuZoku enabled')
		return {'enabled': True, 'config_path': str(path)}

	async def reload_localized_data(self) -> HachimiResult:
		return await self.ipc.call_with_progress(ReloadLocalizedDataCommand(), title='Reloading localized data')

	async def story_goto_block(self, block_id: int | None, incremental: bool = False) -> HachimiResult:
		if block_id is None:
			raise CommandPreconditionError()
		command = StoryGotoBlockCommand(block_id=block_id, incremental=incremental)
		return await self.ipc.call(command)

	async def open_localize_dict_editor(self) -> dict[str, Any]:
		logger.info('Opening localize dict editor')
		return {'editor': 'localize-dict', 'localize_dict_dump': self.config.localize_dict_dump}

	async def open_story_editor(self, story_type: str | None, story_id: str | None) -> dict[str, Any]:
		if not story_type or not story_id:
			raise CommandPreconditionError()
		story_id = normalize_story_id(story_id)
		logger.info(f'Opening story editor for {story_type} story {story_id}')
		return {'editor': 'story', 'story_type': story_type, 'story_id': story_id}

	async def open_mdb_editor(self, table_name: str | None) -> dict[str, Any]:
		if not table_name:
			raise CommandPreconditionError()
		logger.info(f'Opening MDB editor for table {table_name}')
		return {'editor': 'mdb', 'table_name': table_name}

	async def open_lyrics_editor(self, song_index: str | None) -> dict[str, Any]:
		if not song_index:
			raise CommandPreconditionError()
		logger.info(f'Opening lyrics editor for song {song_index}')
		return {'editor': 'lyrics', 'song_index': song_index}

	async def set_localized_data_dir(self, path: str | None) -> dict[str, Any]:
		if not path:
			raise CommandPreconditionError('No localized data directory given')
		self._update_config(localized_data_dir=path)
		logger.info(f'Localized data directory set to {self.config.localized_data_dir}')
		return {'localized_data_dir': self.config.localized_data_dir}

	async def revert_localized_data_dir(self) -> dict[str, Any]:
		self._update_config(localized_data_dir=None)
		logger.info('Localized data directory reverted')
		return {'localized_data_dir': None}

	async def clear_cache(self) -> dict[str, Any]:
		cache_dir = get_cache_dir()
		if cache_dir.exists():
			shutil.rmtree(cache_dir)
		logger.info(f'Cleared cache at {cache_dir}')
		return {'cleared': str(cache_dir)}

	async def handle(self, action: str, params: dict[str, Any]) -> Any:
		"""Dispatch a command by name."""
		if action == 'enable':
			return await self.enable()

		elif action == 'reload-localized-data':
			return await self.reload_localized_data()

		elif action == 'story-goto-block':
			return await self.story_goto_block(params.get('block_id'), params.get('incremental', False))

		elif action == 'open-localize-dict-editor':
			return await self.open_localize_dict_editor()

		elif action == 'open-story-editor':
			return await self.open_story_editor(params.get('story_type'), params.get('story_id'))

		elif action == 'open-mdb-editor':
			return await self.open_mdb_editor(params.get('table_name'))

		elif action == 'open-lyrics-editor':
			return await self.open_lyrics_editor(params.get('song_index'))

		elif action == 'set-localized-data-dir':
			return await self.set_localized_data_dir(params.get('path'))

		elif action == 'revert-localized-data-dir':
			return await self.revert_localized_data_dir()

		elif action == 'clear-cache':
			return await self.clear_cache()

		raise ValueError(f'Unknown command: {action}')
