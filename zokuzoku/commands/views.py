class CommandPreconditionError(Exception):
	"""Raised when a command is missing the context it needs, before anything is sent to Hachimi."""

	def __init__(self, message: str = 'This command cannot be activated manually'):
		super().__init__(message)
