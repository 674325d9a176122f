"""TCP route tracing building blocks: options, addresses, packet headers, sockets and reports."""

__version__ = "1.0.3"