"""
Event publishing, run recording and local web servers.
"""

from .event_emitter import EventEmitter
from .run_recorder import RunRecorder

__all__ = ['EventEmitter', 'RunRecorder']
