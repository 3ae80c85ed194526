"""Protocol layer: line/block framing, command builders, and response parsing."""

from .framing import MAX_DATA_BLOCK, ResponseReader
from .commands import Command, build_command
