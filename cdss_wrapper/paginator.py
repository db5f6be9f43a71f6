"""Paged retrieval of CDSS result sets"""
from typing import Callable, Dict, Any, List, Mapping, TypeVar
import logging

from .config import PAGE_SIZE
from .exceptions import CdssAPIError
from .parsers import parse_collection
from .transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Paginator:
    """
    Fetches every page of an endpoint and returns the combined records.

    Pages are requested with pageSize/pageIndex starting at index 1. A
    page that is empty or shorter than the page size is the last one, so
    a result set that is an exact multiple of the page size costs one
    extra (empty) request.
    """

    def __init__(self, transport: Transport, page_size: int = PAGE_SIZE):
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.transport = transport
        self.page_size = page_size

    def fetch(
        self,
        endpoint: str,
        query: Mapping[str, str],
        build: Callable[[Dict[str, Any]], T]
    ) -> List[T]:
        """
        Fetch all records of an endpoint

        Args:
            endpoint: Endpoint path
            query: Query parameters shared by every page
            build: Converts one raw record into a model

        Returns:
            Records from all pages, in page order

        Raises:
            CdssAPIError: If any page answers with a non-success status.
                Records from earlier pages are discarded.
        """
        results: List[T] = []
        page_index = 1

        while True:
            page_query = {
                **query,
                "pageSize": str(self.page_size),
                "pageIndex": str(page_index)
            }
            response = self.transport.get(endpoint, page_query)
            if not response.ok:
                raise CdssAPIError(response.status_code, response.reason)

            records = parse_collection(response.json(), build)
            logger.debug(f"{endpoint} page {page_index}: {len(records)} records")

            if not records:
                break
            results.extend(records)
            if len(records) < self.page_size:
                break
            page_index += 1

        return results
