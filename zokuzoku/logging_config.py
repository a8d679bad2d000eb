import logging
import os

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(level: str | None = None) -> logging.Logger:
	"""Configure root logging once for CLI use.

	Level comes from the argument, then ZOKUZOKU_LOGGING_LEVEL, then 'info'.
	"""
	level_name = (level or os.getenv('ZOKUZOKU_LOGGING_LEVEL') or 'info').upper()
	log_level = getattr(logging, level_name, None)
	if not isinstance(log_level, int):
		raise ValueError(f'Unknown logging level: {level_name}')

	logging.basicConfig(
		level=log_level,
		format=LOG_FORMAT,
		handlers=[logging.StreamHandler()],
	)
	# httpx logs every request at INFO
	logging.getLogger('httpx').setLevel(max(log_level, logging.WARNING))
	logging.getLogger('httpcore').setLevel(max(log_level, logging.WARNING))

	logger = logging.getLogger('zokuzoku')
	logger.setLevel(log_level)
	return logger
