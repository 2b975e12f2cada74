"""Ice-T terminal tools: ICET.DAT configuration, ZMODEM constants, palette tables, animation demo and TCP-to-console bridge."""

__version__ = "0.1.0"
__all__ = ["animation", "config", "palette", "tcp2con", "zmodem"]