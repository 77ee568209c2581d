"""Infrastructure layer — manifest discovery and directory reads.

This layer touches the filesystem. It may import from domain for the
types it produces, never from services, commands, or output.
"""
