"""Reactive layer — pushes reload signals from the watcher to open browser tabs."""

from flowerstall.reactive.broadcaster import Broadcaster, Subscriber, reload_message
from flowerstall.reactive.channel import ReloadChannel, ReloadSubscription
from flowerstall.reactive.hmr import reload_script

__all__ = [
    "Broadcaster",
    "ReloadChannel",
    "ReloadSubscription",
    "Subscriber",
    "reload_message",
    "reload_script",
]
