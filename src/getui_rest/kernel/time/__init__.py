"""Kernel time – Clock port + implementations."""
from getui_rest.kernel.time.clock import Clock, FrozenClock, SystemClock, epoch_millis

__all__ = ["Clock", "FrozenClock", "SystemClock", "epoch_millis"]
