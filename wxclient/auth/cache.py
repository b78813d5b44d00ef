import asyncio
import threading
import weakref
from typing import Optional
from ..types import BearerCredential


class CredentialCache:
    """
    Holds at most one BearerCredential. Owned by a Client and shared by its models.

    The locks serialize acquisition: callers that observe an expired credential
    wait for the first one to finish and then reuse its result. The async lock
    is created per event loop, so one cache can serve successive `asyncio.run`
    calls.

    The thread lock and the async locks are independent. A sync caller and an
    async caller that observe an expired credential at the same moment each
    acquire one; the last write wins.
    """
    def __init__(self, credential: Optional[BearerCredential] = None):
        self._credential = credential
        self.lock = threading.Lock()
        self._async_locks = weakref.WeakKeyDictionary()

    @property
    def async_lock(self) -> asyncio.Lock:
        """The acquisition lock for the running event loop."""
        loop = asyncio.get_running_loop()
        lock = self._async_locks.get(loop)
        if lock is None:
            lock = self._async_locks[loop] = asyncio.Lock()
        return lock

    @property
    def credential(self) -> Optional[BearerCredential]:
        return self._credential

    def set(self, credential: BearerCredential):
        self._credential = credential
