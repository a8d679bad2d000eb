import os

import pytest
from pytest_httpserver import HTTPServer

from zokuzoku.hachimi.views import HACHIMI_IPC_PORT


@pytest.fixture
def hachimi_server():
	"""Fake Hachimi listening on the real IPC port."""
	server = HTTPServer(host='127.0.0.1', port=HACHIMI_IPC_PORT)
	server.start()
	yield server
	server.clear()
	if server.is_running():
		server.stop()


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
	"""Point the config dir at a temp directory and clear ZOKUZOKU_* overrides."""
	for key in list(os.environ):
		if key.startswith('ZOKUZOKU_'):
			monkeypatch.delenv(key)
	monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path))
	monkeypatch.setenv('APPDATA', str(tmp_path))
	return tmp_path / 'zokuzoku' / 'config.json'
