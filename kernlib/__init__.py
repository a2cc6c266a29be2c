"""C-style runtime helpers (ctype, strings, memory, printf, scanf) and a simulated UART tty driver."""

__version__ = "0.1.0"