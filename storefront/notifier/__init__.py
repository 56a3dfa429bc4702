"""
Live change propagation to connected catalog viewers.
"""
from .broadcaster import EVENT_KINDS, ChangeNotifier, ViewerConnection

__all__ = [
    'EVENT_KINDS',
    'ChangeNotifier',
    'ViewerConnection',
]
