"""Shell history collection."""

from activity_digest.shell.reader import NOISE_COMMANDS, ShellHistoryReader, finalize_commands

__all__ = ["NOISE_COMMANDS", "ShellHistoryReader", "finalize_commands"]
