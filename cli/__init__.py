"""
CodeReplay CLI - record and replay editor sessions

Commands:
- codereplay record - Capture host notifications into a saved log
- codereplay replay - Replay a saved log against local files
- codereplay log tail/inspect/verify - Saved log operations
"""

import os

__version__ = "0.1.0"

DEFAULT_LOG_PATH = os.getenv("CODEREPLAY_LOG_PATH", "codereplay-session.jsonl")
