"""Small string helpers shared by config and commands."""

import os
import re
import sys

STORY_ID_LENGTH = 9

_WINDOWS_VAR_RE = re.compile(r'%([^%]+)%')
_UNIX_VAR_RE = re.compile(r'\$(?:\{([^}]*)\}?|([A-Za-z0-9_]+))')


def expand_environment_variables(text: str) -> str:
	"""Expand environment variables in a path.

	On Windows, %VAR% is expanded and unknown names are left untouched.
	Elsewhere, $VAR and ${VAR} are expanded and unknown names become ''.
	"""
	if sys.platform == 'win32':
		return _WINDOWS_VAR_RE.sub(lambda m: os.environ.get(m.group(1), m.group(0)), text)

	def _replace(match: re.Match) -> str:
		name = match.group(1) if match.group(1) is not None else match.group(2)
		return os.environ.get(name, '')

	return _UNIX_VAR_RE.sub(_replace, text)


def normalize_story_id(story_id: str) -> str:
	"""Zero-pad a story id to its canonical 9 digits."""
	return story_id.rjust(STORY_ID_LENGTH, '0')


def make_active_status_label(label: str, active: bool) -> str:
	return f'✓ {label}' if active else f'○ {label}'
