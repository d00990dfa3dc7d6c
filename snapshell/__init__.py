"""
Snappy shell command generation from natural language.

This package turns a plain-language instruction into a shell command using a
model served through OpenRouter's chat-completions API. The command is
printed, copied to the clipboard where the platform allows, and recorded in a
local history log.
"""

__version__ = "0.1.0"
