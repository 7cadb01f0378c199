"""Streaming parser, framing helpers and configuration keys for the UBX protocol."""

__version__ = "0.1.0"

__all__ = ["buffers", "cfg_keys", "cfg_val", "errors", "packets", "parser"]