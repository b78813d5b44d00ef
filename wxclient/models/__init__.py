from .chat import ChatModel, StreamState

__all__ = ["ChatModel", "StreamState"]
