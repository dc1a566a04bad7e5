from typing import AsyncIterator, Awaitable, Callable, Generic, Iterable, List, Optional, Tuple, TypeVar

from utils.exceptions import PartialReadFailure
from utils.logger_utils import get_logger

logger = get_logger("Sparse Collection Walker")

T = TypeVar("T")
K = TypeVar("K")


class SparseCollectionWalker(Generic[T]):
    """
    Enumerates an on-chain array exposed only as `arr(index)`, with no length accessor.

    Reads start at index 0 and stop at the first failure of any kind, which is taken as the end
    of the collection. A transient RPC failure therefore truncates the result at that index;
    nothing is retried. Each call to `iterate` starts again from index 0.
    """

    def __init__(self, read_at: Callable[[int], Awaitable[T]], label: str = "collection", limit: Optional[int] = None):
        self._read_at = read_at
        self._label = label
        self._limit = limit

    async def iterate(self) -> AsyncIterator[T]:
        index = 0
        while self._limit is None or index < self._limit:
            try:
                item = await self._read_at(index)
            except Exception as e:
                logger.debug(f"{self._label}: read at index {index} failed, treating as end of collection ({e})")
                logger.info(f"{self._label}: found {index} item(s)")
                return
            yield item
            index += 1
        logger.warning(f"{self._label}: stopped at limit {self._limit}, collection may be longer")

    async def walk(self) -> List[T]:
        return [item async for item in self.iterate()]


async def walk_with_placeholders(
    keys: Iterable[K],
    read_one: Callable[[K], Awaitable[T]],
    placeholder: Callable[[K], T],
    label: str = "item",
) -> List[T]:
    """
    Reads one record per key, in order. A failed read is replaced by `placeholder(key)` so the
    result always has one record per key.
    """
    results: List[T] = []
    for key in keys:
        try:
            results.append(await read_one(key))
        except Exception as e:
            failure = PartialReadFailure(f"{label} {key}", e)
            logger.warning(f"{failure}. Using placeholder record.")
            results.append(placeholder(key))
    return results


async def scan_ids(
    read_at: Callable[[int], Awaitable[T]],
    is_present: Callable[[T], bool],
    start: int = 1,
    max_consecutive_misses: int = 3,
    label: str = "id",
) -> List[Tuple[int, T]]:
    """
    Tolerant variant of SparseCollectionWalker for id-keyed mappings with gaps (deleted entries).

    Reads ids upward from `start`. An empty slot and a failed read both count as a miss; the
    scan ends after `max_consecutive_misses` misses in a row. Returns (id, record) pairs for the
    present ids, in ascending order.
    """
    found: List[Tuple[int, T]] = []
    current = start
    misses = 0
    while misses < max_consecutive_misses:
        try:
            record = await read_at(current)
        except Exception as e:
            logger.debug(f"{label} {current}: read failed, counting as empty ({e})")
            record = None
            present = False
        else:
            present = is_present(record)

        if present:
            found.append((current, record))
            misses = 0
        else:
            misses += 1
        current += 1

    logger.info(f"{label}: found {len(found)} present id(s) in {current - start} read(s)")
    return found
