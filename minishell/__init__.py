"""An interactive command shell with pipes, quoting, variable expansion and builtins."""

__version__ = "0.1.0"