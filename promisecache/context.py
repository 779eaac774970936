import asyncio
import threading
from typing import Optional

from promisecache.exceptions import ExecutionContextError


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def is_foreground() -> bool:
    """True when the calling thread is driving an asyncio event loop."""
    return _running_loop() is not None


def require_background(operation: str) -> None:
    if is_foreground():
        raise ExecutionContextError(
            f"{operation} must not run on the event loop thread ({threading.current_thread().name})"
        )


def require_foreground(loop: asyncio.AbstractEventLoop) -> None:
    if _running_loop() is not loop:
        raise ExecutionContextError(
            f"expected to run on event loop {loop!r} from thread {threading.current_thread().name}"
        )
