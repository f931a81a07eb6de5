"""OmniStore package.

A small command-driven key/value store. Text commands such as
``savedata key:value`` are parsed, applied to an in-memory map and mirrored
to a flat ``key:value`` file. Modules are lightweight and do not touch the
file system on import.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
