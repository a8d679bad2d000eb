"""Tests for config loading and saving."""

import json

import pytest
from pydantic import ValidationError

from zokuzoku.config import (
	DecryptionConfig,
	ZokuZokuConfig,
	get_config_path,
	get_config_value,
	load_config,
	save_config,
	set_config_value,
)


def test_defaults_without_file(isolated_config):
	config = load_config()

	assert config.enabled is False
	assert config.game_data_dir is None
	assert config.hachimi_ipc_address == '127.0.0.1'


def test_config_path_uses_config_home(isolated_config):
	assert get_config_path() == isolated_config


def test_file_overrides_defaults(isolated_config):
	isolated_config.parent.mkdir(parents=True)
	isolated_config.write_text(json.dumps({'hachimi_ipc_address': '10.0.0.2', 'enabled': True, 'unknown_key': 1}))

	config = load_config()

	assert config.hachimi_ipc_address == '10.0.0.2'
	assert config.enabled is True


def test_env_overrides_file(isolated_config, monkeypatch):
	isolated_config.parent.mkdir(parents=True)
	isolated_config.write_text(json.dumps({'hachimi_ipc_address': '10.0.0.2'}))
	monkeypatch.setenv('ZOKUZOKU_HACHIMI_IPC_ADDRESS', '10.0.0.3')
	monkeypatch.setenv('ZOKUZOKU_ENABLED', 'true')

	config = load_config()

	assert config.hachimi_ipc_address == '10.0.0.3'
	assert config.enabled is True


def test_malformed_file_is_ignored(isolated_config, caplog):
	isolated_config.parent.mkdir(parents=True)
	isolated_config.write_text('{not json')

	config = load_config()

	assert config.hachimi_ipc_address == '127.0.0.1'
	assert 'Ignoring unreadable config file' in caplog.text


def test_game_data_dir_expands_env(isolated_config, monkeypatch):
	monkeypatch.setattr('sys.platform', 'linux')
	monkeypatch.setenv('GAME_ROOT', '/games')
	monkeypatch.setenv('ZOKUZOKU_GAME_DATA_DIR', '${GAME_ROOT}/umamusume')

	assert load_config().game_data_dir == '/games/umamusume'


@pytest.mark.parametrize('address', ['', '   '])
def test_empty_address_rejected(address):
	with pytest.raises(ValidationError):
		ZokuZokuConfig(hachimi_ipc_address=address)


def test_address_is_stripped():
	assert ZokuZokuConfig(hachimi_ipc_address=' 127.0.0.1 ').hachimi_ipc_address == '127.0.0.1'


def test_save_then_load(isolated_config):
	written = save_config(ZokuZokuConfig(hachimi_ipc_address='192.168.0.9', enabled=True))

	assert written == isolated_config
	assert json.loads(written.read_text())['hachimi_ipc_address'] == '192.168.0.9'
	assert load_config().hachimi_ipc_address == '192.168.0.9'


def test_full_defaults(isolated_config):
	config = load_config()

	assert config.localize_dict_dump is None
	assert config.localized_data_dir is None
	assert config.auto_download_bundles is True
	assert config.sqlite3 == 'sqlite3'
	assert config.use_game_font is True
	assert config.custom_font is None
	assert config.decryption == DecryptionConfig(enabled=True, meta_key=None)


def test_file_and_env_for_nested_fields(isolated_config, monkeypatch):
	isolated_config.parent.mkdir(parents=True)
	isolated_config.write_text(
		json.dumps(
			{
				'sqlite3': '/usr/bin/sqlite3',
				'use_game_font': False,
				'custom_font': '/fonts/a.ttf',
				'decryption': {'enabled': False, 'meta_key': 'from-file'},
			}
		)
	)
	monkeypatch.setenv('ZOKUZOKU_DECRYPTION__META_KEY', 'from-env')
	monkeypatch.setenv('ZOKUZOKU_AUTO_DOWNLOAD_BUNDLES', '0')

	config = load_config()

	assert config.sqlite3 == '/usr/bin/sqlite3'
	assert config.use_game_font is False
	assert config.custom_font == '/fonts/a.ttf'
	assert config.auto_download_bundles is False
	# env replaces one nested key, the rest comes from the file
	assert config.decryption.meta_key == 'from-env'
	assert config.decryption.enabled is False


def test_new_fields_survive_save(isolated_config):
	config = ZokuZokuConfig(localize_dict_dump='/dumps/dict.json', decryption=DecryptionConfig(meta_key='k'))
	save_config(config)

	assert load_config() == config


class TestGetSetValue:
	def test_get_top_level_and_nested(self):
		config = ZokuZokuConfig(decryption=DecryptionConfig(meta_key='k'))

		assert get_config_value(config, 'sqlite3') == 'sqlite3'
		assert get_config_value(config, 'decryption.meta_key') == 'k'
		assert get_config_value(config, 'decryption') == {'enabled': True, 'meta_key': 'k'}

	@pytest.mark.parametrize('key', ['nope', 'decryption.nope', 'sqlite3.path'])
	def test_get_unknown_key(self, key):
		with pytest.raises(KeyError):
			get_config_value(ZokuZokuConfig(), key)

	def test_set_returns_validated_copy(self):
		original = ZokuZokuConfig()
		updated = set_config_value(original, 'decryption.enabled', 'false')

		assert updated.decryption.enabled is False
		assert original.decryption.enabled is True

	def test_set_rejects_invalid_value(self):
		with pytest.raises(ValidationError):
			set_config_value(ZokuZokuConfig(), 'use_game_font', 'sometimes')

	@pytest.mark.parametrize('key', ['nope', 'decryption', 'decryption.nope', 'sqlite3.path'])
	def test_set_unknown_key(self, key):
		with pytest.raises(KeyError):
			set_config_value(ZokuZokuConfig(), key, 'x')
