import logging
from concurrent.futures import Future
from typing import NamedTuple, Any, Callable, Optional

logger = logging.getLogger(__name__)


class PagedResult(NamedTuple):
    """ A page of results

        Example:

            PagedResult(total=10, limit=2, page=3, data=[{...}, {...}])
    """
    #: The number of matching documents, ignoring pagination
    total: int
    #: The page size that was applied; the total when there was no limit
    limit: int
    #: The page number, 1-based
    page: int
    #: Documents on this page
    data: list


class ResultChannel:
    """ Deliver the outcome of a call to both completion styles

        The outcome is stored in a Future (and can only be stored once), and is given to the callback, if any:

        * success: `callback(None, result)`, and `result()` returns the result
        * failure: `callback(error, None)`, and `result()` raises the error

        An exception raised by the callback is logged, and does not change the outcome the caller gets.
    """

    __slots__ = ('callback', 'future')

    def __init__(self, callback: Optional[Callable[[Optional[Exception], Any], Any]] = None):
        self.callback = callback
        self.future = Future()

    def resolve(self, result):
        """ Complete with a result """
        self.future.set_result(result)
        self._notify(None, result)

    def reject(self, error: Exception):
        """ Complete with an error """
        self.future.set_exception(error)
        self._notify(error, None)

    def _notify(self, error, result):
        if self.callback is None:
            return
        try:
            self.callback(error, result)
        except Exception:
            logger.exception('Pagination callback %r has failed', self.callback)

    def result(self):
        """ Get the result, or raise the error """
        return self.future.result()
