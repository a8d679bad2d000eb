"""Tests for CLI argument parsing and exit codes."""

import json

from pytest_httpserver import HTTPServer

from zokuzoku.cli import build_parser, main


def test_goto_block_args():
	args = build_parser().parse_args(['goto-block', '42', '--incremental'])
	assert args.command == 'goto-block'
	assert args.block_id == 42
	assert args.incremental is True


def test_global_address_before_subcommand():
	args = build_parser().parse_args(['--address', '10.0.0.5', 'reload'])
	assert args.address == '10.0.0.5'
	assert args.command == 'reload'


def test_no_command_prints_help(capsys):
	assert main([]) == 0
	assert 'usage: zokuzoku' in capsys.readouterr().out


def test_config_json(isolated_config, monkeypatch, capsys):
	monkeypatch.setenv('ZOKUZOKU_HACHIMI_IPC_ADDRESS', '10.1.1.1')

	assert main(['--json', 'config']) == 0

	data = json.loads(capsys.readouterr().out)
	assert data['hachimi_ipc_address'] == '10.1.1.1'


def test_goto_block_ok(isolated_config, hachimi_server: HTTPServer, capsys):
	hachimi_server.expect_request(
		'/', method='POST', data='{"type":"StoryGotoBlock","block_id":42,"incremental":true}'
	).respond_with_json({'type': 'Ok'})

	assert main(['--json', 'goto-block', '42', '--incremental']) == 0

	assert json.loads(capsys.readouterr().out) == {'success': True, 'data': {'type': 'Ok'}}


def test_reload_remote_error_exit_code(isolated_config, hachimi_server: HTTPServer, capsys):
	hachimi_server.expect_request('/', method='POST').respond_with_json({'type': 'Error', 'message': None})

	assert main(['reload']) == 1

	assert 'Error: Unknown error' in capsys.readouterr().err


def test_unreachable_json_reports_kind(isolated_config, capsys):
	assert main(['--json', '--address', '127.0.0.1', 'reload']) == 1

	out = json.loads(capsys.readouterr().out)
	assert out['success'] is False
	assert out['kind'] == 'HachimiTransportError'


def test_bad_log_level_is_reported(isolated_config, capsys):
	assert main(['--log-level', 'loud', 'reload']) == 1

	assert 'Error: Unknown logging level: LOUD' in capsys.readouterr().err


def test_malformed_address_is_reported(isolated_config, capsys):
	assert main(['--json', '--address', 'host:1', 'reload']) == 1

	out = json.loads(capsys.readouterr().out)
	assert out['kind'] == 'HachimiTransportError'


def test_config_get_nested(isolated_config, monkeypatch, capsys):
	monkeypatch.setenv('ZOKUZOKU_DECRYPTION__META_KEY', 'secret')

	assert main(['--json', 'config', 'decryption.meta_key']) == 0

	assert json.loads(capsys.readouterr().out) == {'decryption.meta_key': 'secret'}


def test_config_set_saves(isolated_config, capsys):
	assert main(['config', 'use_game_font', 'false']) == 0
	assert json.loads(isolated_config.read_text())['use_game_font'] is False

	assert main(['config', 'custom_font', 'null']) == 0
	assert json.loads(isolated_config.read_text())['custom_font'] is None


def test_config_unknown_key(isolated_config, capsys):
	assert main(['config', 'no_such_key']) == 1

	assert 'Unknown config key: no_such_key' in capsys.readouterr().err


def test_set_data_dir_and_enable(isolated_config, capsys):
	assert main(['--json', 'set-data-dir', '/srv/localized']) == 0
	assert json.loads(capsys.readouterr().out)['data'] == {'localized_data_dir': '/srv/localized'}

	assert main(['enable']) == 0

	saved = json.loads(isolated_config.read_text())
	assert saved['enabled'] is True
	assert saved['localized_data_dir'] == '/srv/localized'
