"""User configuration for ZokuZoku.

Values are resolved in order: built-in defaults, then the JSON config file, then
ZOKUZOKU_<FIELD> environment variables. Nested sections use a double underscore,
e.g. ZOKUZOKU_DECRYPTION__META_KEY.
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from zokuzoku.hachimi.views import DEFAULT_HACHIMI_IPC_ADDRESS
from zokuzoku.utils import expand_environment_variables

logger = logging.getLogger(__name__)

ENV_PREFIX = 'ZOKUZOKU_'
ENV_NESTED_DELIMITER = '__'
CONFIG_FILE_NAME = 'config.json'


class DecryptionConfig(BaseModel):
	"""Settings for reading the encrypted game meta database."""

	model_config = ConfigDict(extra='ignore', validate_assignment=True)

	enabled: bool = True
	meta_key: str | None = None


class ZokuZokuConfig(BaseModel):
	model_config = ConfigDict(extra='ignore', validate_assignment=True)

	enabled: bool = False
	game_data_dir: str | None = None
	localize_dict_dump: str | None = None
	localized_data_dir: str | None = None
	auto_download_bundles: bool = True
	sqlite3: str = 'sqlite3'
	use_game_font: bool = True
	custom_font: str | None = None
	hachimi_ipc_address: str = DEFAULT_HACHIMI_IPC_ADDRESS
	decryption: DecryptionConfig = Field(default_factory=DecryptionConfig)

	@field_validator('game_data_dir', 'localize_dict_dump', 'localized_data_dir', 'custom_font')
	@classmethod
	def _expand_paths(cls, value: str | None) -> str | None:
		if value is None:
			return None
		return expand_environment_variables(value)

	@field_validator('hachimi_ipc_address')
	@classmethod
	def _check_address(cls, value: str) -> str:
		value = value.strip()
		if not value:
			raise ValueError('hachimi_ipc_address must not be empty')
		return value


def get_config_dir() -> Path:
	"""Get zokuzoku config directory."""
	if sys.platform == 'win32':
		base = Path(os.environ.get('APPDATA', Path.home()))
	else:
		base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))
	return base / 'zokuzoku'


def get_cache_dir() -> Path:
	"""Get zokuzoku cache directory."""
	if sys.platform == 'win32':
		base = Path(os.environ.get('LOCALAPPDATA', Path.home()))
	else:
		base = Path(os.environ.get('XDG_CACHE_HOME', Path.home() / '.cache'))
	return base / 'zokuzoku'


def get_config_path() -> Path:
	return get_config_dir() / CONFIG_FILE_NAME


def _read_config_file(path: Path) -> dict[str, Any]:
	if not path.exists():
		return {}
	try:
		data = json.loads(path.read_text(encoding='utf-8'))
	except (OSError, ValueError) as e:
		logger.warning(f'Ignoring unreadable config file {path}: {e}')
		return {}
	if not isinstance(data, dict):
		logger.warning(f'Ignoring config file {path}: expected a JSON object')
		return {}
	return data


def _read_env_overrides(model: type[BaseModel] = ZokuZokuConfig, prefix: str = ENV_PREFIX) -> dict[str, Any]:
	overrides: dict[str, Any] = {}
	for name, field in model.model_fields.items():
		env_name = f'{prefix}{name.upper()}'
		annotation = field.annotation
		if isinstance(annotation, type) and issubclass(annotation, BaseModel):
			nested = _read_env_overrides(annotation, f'{env_name}{ENV_NESTED_DELIMITER}')
			if nested:
				overrides[name] = nested
			continue
		value = os.environ.get(env_name)
		if value is not None:
			overrides[name] = value
	return overrides


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
	merged = dict(base)
	for key, value in overrides.items():
		if isinstance(value, dict) and isinstance(merged.get(key), dict):
			merged[key] = _merge(merged[key], value)
		else:
			merged[key] = value
	return merged


def load_config(path: Path | None = None) -> ZokuZokuConfig:
	"""Load config from defaults, the config file and the environment.

	Raises:
		pydantic.ValidationError: A value from the file or environment is invalid
	"""
	path = path or get_config_path()
	values = _merge(_read_config_file(path), _read_env_overrides())
	config = ZokuZokuConfig.model_validate(values)
	logger.debug(f'Loaded config from {path}: {config.model_dump()}')
	return config


def save_config(config: ZokuZokuConfig, path: Path | None = None) -> Path:
	"""Write config to disk as pretty JSON and return the path written."""
	path = path or get_config_path()
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(config.model_dump_json(indent=2), encoding='utf-8')
	return path


def get_config_value(config: ZokuZokuConfig, key: str) -> Any:
	"""Read a value by dotted key, e.g. 'decryption.meta_key'. Raises KeyError for unknown keys."""
	value: Any = config.model_dump()
	for part in key.split('.'):
		if not isinstance(value, dict) or part not in value:
			raise KeyError(key)
		value = value[part]
	return value


def set_config_value(config: ZokuZokuConfig, key: str, value: Any) -> ZokuZokuConfig:
	"""Return a copy of config with one dotted key replaced.

	Raises:
		KeyError: Unknown key
		pydantic.ValidationError: The value is invalid for that key
	"""
	data = config.model_dump()
	parts = key.split('.')
	target = data
	for part in parts[:-1]:
		if not isinstance(target.get(part), dict):
			raise KeyError(key)
		target = target[part]
	if parts[-1] not in target or isinstance(target[parts[-1]], dict):
		raise KeyError(key)
	target[parts[-1]] = value
	return ZokuZokuConfig.model_validate(data)
