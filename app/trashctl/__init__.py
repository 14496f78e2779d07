"""trashctl - a recoverable trash can for the command line.

Files and directories are compressed into a trash folder instead of being
deleted, and can be listed, restored to their original location, or
permanently emptied.
"""

__version__ = "0.1.0"
