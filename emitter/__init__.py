"""
Emitter package.

Typed publish/subscribe event dispatch:
- Events (scoped and global listeners, one-shot listeners)
- Utils (listener id generation, bulk clearing)
- Config and structured logging
"""

from emitter.config import EmitterSettings
from emitter.events import EmitterEvent, EventEmitter, Token

__version__ = "0.1.0"

__all__ = ["EmitterEvent", "EmitterSettings", "EventEmitter", "Token"]
