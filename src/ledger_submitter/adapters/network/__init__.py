from .stellard_rpc import StellardRpcNetwork

__all__ = ["StellardRpcNetwork"]
