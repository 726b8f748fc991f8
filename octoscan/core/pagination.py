"""
Lazy iteration over paginated GitHub API results.

GitHub list endpoints page their results in one of two ways: by page number
(offset pagination) or by an opaque continuation token returned in the
``after`` query parameter of the ``Link`` header (cursor pagination). The
functions in this module take a page-fetch function and turn it into a lazy,
single-pass iterator over every item of every page, switching between the two
styles based on what each response advertises.

A page-fetch function receives a :class:`PaginationOption` and returns a
``(items, page)`` tuple, where ``page`` exposes ``next_page`` and ``after``
(see :class:`octoscan.api.response.Response`). It signals failure by raising.

Example:
    comments, err = scan_and_collect(
        lambda opt: api.list_issue_comments("google", "go-github", 526, None, opt)
    )
"""

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from octoscan.core.exceptions import IteratorNotExhaustedError, PaginationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PaginationOption:
    """
    Selects the page a request should fetch.

    The zero value requests the first page with default settings. An option
    is either offset based (``page``) or cursor based (``after``), never both.

    Attributes:
        page: Page number for offset pagination (0 means unset)
        after: Continuation token for cursor pagination ("" means unset)
    """

    page: int = 0
    after: str = ""

    def __post_init__(self):
        if self.page and self.after:
            raise ValueError("PaginationOption cannot set both page and after")

    @property
    def is_offset(self) -> bool:
        return self.page != 0

    @property
    def is_cursor(self) -> bool:
        return self.after != ""

    def apply(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return a copy of the query parameters with this option applied."""
        params = dict(params or {})
        if self.is_offset:
            params["page"] = self.page
        elif self.is_cursor:
            params["after"] = self.after
        return params


def with_offset_pagination(page: int) -> PaginationOption:
    """Option requesting the given page number."""
    return PaginationOption(page=page)


def with_after_pagination(cursor: str) -> PaginationOption:
    """Option requesting the page following the given cursor."""
    return PaginationOption(after=cursor)


FetchFunc = Callable[[PaginationOption], Tuple[Sequence[T], Any]]


def scan2(fetch: FetchFunc) -> Iterator[Tuple[Optional[T], Optional[Exception]]]:
    """
    Scan all pages of ``fetch`` and yield ``(item, error)`` pairs.

    Every item is yielded with a ``None`` error. If ``fetch`` raises, a single
    ``(None, error)`` pair is yielded and iteration ends; items of the failed
    page are discarded. Pages are only fetched when the consumer asks for the
    next item, so stopping early never triggers another request.

    Args:
        fetch: Page-fetch function, called first with ``PaginationOption()``

    Yields:
        Tuple of item and error, exactly one of which is meaningful
    """
    next_opt = PaginationOption()
    page_count = 0

    while True:
        try:
            items, page = fetch(next_opt)
        except Exception as e:
            logger.debug(f"Pagination stopped by error on page {page_count + 1}: {e}")
            yield None, e
            return

        page_count += 1
        for item in items or ():
            yield item, None

        # fetch was configured for either offset or cursor pagination
        if page is not None and page.next_page:
            next_opt = with_offset_pagination(page.next_page)
        elif page is not None and page.after:
            next_opt = with_after_pagination(page.after)
        else:
            logger.debug(f"Pagination complete after {page_count} page(s)")
            return

        logger.debug(f"Fetching next page with {next_opt}")


class ScanIterator(Generic[T]):
    """
    Item iterator over all pages of a page-fetch function.

    Errors are not surfaced per item. Once iteration is over, whether it ran
    to completion, hit an error, or was stopped with :meth:`close`, the error
    (if any) is available from :meth:`check_error`.

    A consumer that stops early must do so through :meth:`close` or by
    leaving a ``with`` block. A bare ``break``, or partial consumption through
    helpers such as ``itertools.islice``, leaves the iterator open and
    :meth:`check_error` keeps raising :class:`IteratorNotExhaustedError`::

        it, check_error = scan(fetch)
        with it:
            first_ten = list(itertools.islice(it, 10))
        err = check_error()
    """

    def __init__(self, fetch: FetchFunc):
        self._pairs = scan2(fetch)
        self._exhausted = False
        self._error: Optional[Exception] = None
        self._items = self._iterate()

    def _iterate(self) -> Iterator[T]:
        try:
            for item, err in self._pairs:
                if err is not None:
                    self._error = err
                    return
                yield item
        finally:
            self._pairs.close()
            self._exhausted = True

    def __iter__(self) -> "ScanIterator[T]":
        return self

    def __next__(self) -> T:
        return next(self._items)

    def __enter__(self) -> "ScanIterator[T]":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def close(self) -> None:
        """Stop iteration early. No further pages are fetched."""
        self._items.close()
        self._pairs.close()
        self._exhausted = True

    def check_error(self) -> Optional[Exception]:
        """
        Return the error that ended iteration, or None.

        Raises:
            IteratorNotExhaustedError: If iteration has not ended yet
        """
        if not self._exhausted:
            raise IteratorNotExhaustedError(
                "called error function of Scan iterator before iterator was exhausted"
            )
        return self._error


def scan(fetch: FetchFunc) -> Tuple[ScanIterator[T], Callable[[], Optional[Exception]]]:
    """
    Scan all pages of ``fetch`` and return an item iterator plus an error function.

    If an error happens during pagination the iterator stops immediately. The
    caller must call the error function after iteration to retrieve it.
    """
    it: ScanIterator[T] = ScanIterator(fetch)
    return it, it.check_error


def must_iter(pairs: Iterable[Tuple[Optional[T], Optional[Exception]]]) -> Iterator[T]:
    """
    Turn an ``(item, error)`` iterator into an item iterator.

    Raises:
        PaginationError: On the first error produced by ``pairs``
    """
    for item, err in pairs:
        if err is not None:
            raise PaginationError(f"iterator produced an error: {err}") from err
        yield item


def scan_and_collect(fetch: FetchFunc) -> Tuple[List[T], Optional[Exception]]:
    """
    Collect the items of all pages of ``fetch`` into a list.

    Returns:
        Tuple of all items and None, or an empty list and the error that
        stopped pagination. Partial results are never returned.
    """
    it, check_error = scan(fetch)
    all_items = list(it)
    err = check_error()
    if err is not None:
        return [], err
    return all_items, None
