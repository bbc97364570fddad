"""nLoss: in-memory image transform toolkit over complex-valued RGB buffers."""

__version__ = '0.1.0'
