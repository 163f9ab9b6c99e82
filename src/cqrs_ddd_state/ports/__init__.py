from .state_host import IEmitter, IEventTransformer, IStateHost, StateHandler

__all__ = [
    "IEmitter",
    "IEventTransformer",
    "IStateHost",
    "StateHandler",
]
