from .halt_switch import HaltSwitch

__all__ = ["HaltSwitch"]
