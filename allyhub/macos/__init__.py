"""macOS integration module.

Provides the main-thread execution context a menu bar host binds the timer
and task list to.
"""

from allyhub.macos.execution_context import AppKitExecutionContext

__all__ = ["AppKitExecutionContext"]
