"""Execution context bound to the Cocoa main thread.

A macOS menu-bar host runs its ``NSApplication`` loop on the main thread; this
context posts mutation and delivery work onto that loop through PyObjC's
``AppHelper`` and schedules delayed work with one-shot ``NSTimer`` instances.
"""

import logging
from typing import Any, Callable

import objc
from Foundation import NSObject, NSTimer
from PyObjCTools import AppHelper

from allyhub.utils.execution_context import ExecutionContext, ScheduledCall

logger = logging.getLogger(__name__)


class ScheduledCallTarget(NSObject):
    """NSTimer target that runs a single scheduled call."""

    def initWithCall_(self, call):
        """Initialize the target."""
        self = objc.super(ScheduledCallTarget, self).init()
        if self is None:
            return None
        self.call = call
        return self

    def fire_(self, timer):
        """Timer callback (called by NSTimer)."""
        self.call.run()


class AppKitExecutionContext(ExecutionContext):
    """Context that runs callbacks on the AppKit main run loop.

    ``call_later`` must be invoked on the main thread, since the timer is added
    to the current run loop.
    """

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        AppHelper.callAfter(callback, *args)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> ScheduledCall:
        call = ScheduledCall(callback, args)
        target = ScheduledCallTarget.alloc().initWithCall_(call)
        timer = NSTimer.scheduledTimerWithTimeInterval_target_selector_userInfo_repeats_(
            delay,
            target,
            "fire:",
            None,
            False,
        )
        call.attach(timer.invalidate)
        logger.debug(f"Scheduled main-thread call in {delay}s")
        return call
