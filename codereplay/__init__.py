"""
CodeReplay

Records editor text-edit and file-focus events into an ordered log and replays
that log into the original files or into "(playback)" clones, paced like live typing.
"""

__version__ = "0.1.0"
