"""Command line entry point for talking to Hachimi."""

import argparse
import asyncio
import json
import sys
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from zokuzoku.commands import CommandHandler, CommandPreconditionError
from zokuzoku.config import ZokuZokuConfig, get_config_path, get_config_value, load_config, save_config, set_config_value
from zokuzoku.hachimi import HachimiIpc, HachimiIpcError
from zokuzoku.logging_config import setup_logging

# CLI subcommand -> CommandHandler action
HANDLER_ACTIONS = {
	'enable': 'enable',
	'reload': 'reload-localized-data',
	'goto-block': 'story-goto-block',
	'set-data-dir': 'set-localized-data-dir',
	'revert-data-dir': 'revert-localized-data-dir',
	'clear-cache': 'clear-cache',
}


def build_parser() -> argparse.ArgumentParser:
	"""Build argument parser with all commands."""
	parser = argparse.ArgumentParser(
		prog='zokuzoku',
		description='Control a running Hachimi instance',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  zokuzoku reload                        # Reload localized data
  zokuzoku goto-block 42                 # Jump story to block 42
  zokuzoku goto-block 43 --incremental   # Step to block 43 from the current one
  zokuzoku --address 192.168.1.5 reload  # Talk to Hachimi on another machine
  zokuzoku --address ::1 reload          # IPv6 addresses work too
  zokuzoku set-data-dir ~/localized      # Point Hachimi data at a directory
  zokuzoku config                        # Show resolved configuration
  zokuzoku config decryption.meta_key    # Show one value
  zokuzoku config use_game_font false    # Change and save one value
""",
	)

	# Global flags
	parser.add_argument('--address', '-a', help='Hachimi IPC address (default: from config)')
	parser.add_argument('--json', action='store_true', help='Output as JSON')
	parser.add_argument('--log-level', help='Logging level (default: info)')

	subparsers = parser.add_subparsers(dest='command', help='Command to execute')

	# -------------------------------------------------------------------------
	# Hachimi Commands
	# -------------------------------------------------------------------------

	# goto-block <block_id>
	p = subparsers.add_parser('goto-block', help='Jump the current story to a block')
	p.add_argument('block_id', type=int, help='Target block index')
	p.add_argument('--incremental', action='store_true', help='Step from the current block')

	# reload
	subparsers.add_parser('reload', help='Reload localized data in Hachimi')

	# -------------------------------------------------------------------------
	# Workspace Commands
	# -------------------------------------------------------------------------

	subparsers.add_parser('enable', help='Enable ZokuZoku')

	p = subparsers.add_parser('set-data-dir', help='Set the localized data directory')
	p.add_argument('path', help='Directory path (environment variables are expanded)')

	subparsers.add_parser('revert-data-dir', help='Clear the localized data directory setting')

	subparsers.add_parser('clear-cache', help='Delete cached files')

	# config [key [value]]
	p = subparsers.add_parser('config', help='Show or change configuration')
	p.add_argument('key', nargs='?', help='Dotted key, e.g. decryption.enabled')
	p.add_argument('value', nargs='?', help='New value; "null" clears optional values')

	return parser


def _print_result(result: Any, as_json: bool) -> None:
	data = result.model_dump() if isinstance(result, BaseModel) else result
	if as_json:
		print(json.dumps({'success': True, 'data': data}))
	elif isinstance(result, BaseModel):
		message = getattr(result, 'message', None)
		print(f'{result.type}: {message}' if message else result.type)
	else:
		for key, value in data.items():
			print(f'{key}: {value}')


def _print_error(e: Exception, as_json: bool) -> None:
	if as_json:
		print(json.dumps({'success': False, 'error': str(e), 'kind': type(e).__name__}))
	else:
		print(f'Error: {e}', file=sys.stderr)


def _handle_config(args: argparse.Namespace, config: ZokuZokuConfig) -> int:
	if args.key is None:
		data: Any = config.model_dump()
	elif args.value is None:
		data = {args.key: get_config_value(config, args.key)}
	else:
		value = None if args.value == 'null' else args.value
		config = set_config_value(config, args.key, value)
		save_config(config)
		data = {args.key: get_config_value(config, args.key)}

	if args.json:
		print(json.dumps(data))
	else:
		for key, value in data.items():
			print(f'{key}: {value}')
	return 0


async def _run_command(args: argparse.Namespace, config: ZokuZokuConfig, address: str) -> Any:
	params = {key: value for key, value in vars(args).items() if value is not None}
	async with HachimiIpc(address=address) as ipc:
		handler = CommandHandler(ipc, config=config)
		return await handler.handle(HANDLER_ACTIONS[args.command], params)


def main(argv: list[str] | None = None) -> int:
	"""Main entry point."""
	load_dotenv()
	parser = build_parser()
	args = parser.parse_args(argv)

	if not args.command:
		parser.print_help()
		return 0

	try:
		setup_logging(args.log_level)
	except ValueError as e:
		_print_error(e, args.json)
		return 1

	try:
		config = load_config()
	except ValidationError as e:
		print(f'Error: invalid config in {get_config_path()} or environment: {e}', file=sys.stderr)
		return 1

	if args.command == 'config':
		try:
			return _handle_config(args, config)
		except KeyError as e:
			_print_error(ValueError(f'Unknown config key: {e.args[0]}'), args.json)
			return 1
		except ValidationError as e:
			_print_error(e, args.json)
			return 1

	address = args.address or config.hachimi_ipc_address

	try:
		result = asyncio.run(_run_command(args, config, address))
	except (CommandPreconditionError, HachimiIpcError, ValidationError) as e:
		_print_error(e, args.json)
		return 1

	_print_result(result, args.json)
	return 0


if __name__ == '__main__':
	sys.exit(main())
