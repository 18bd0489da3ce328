import logging
from typing import Optional, Set, Sequence

from qbitless.domain.torrent import SelectionCriteria, TargetSet, Torrent, TorrentFilter
from qbitless.external.errors import QbittorrentError
from qbitless.external.qbittorrent import QbittorrentApi

logger = logging.getLogger(__name__)


class SelectionError(Exception):
    def __init__(self, criterion: str, error: QbittorrentError):
        self.criterion = criterion
        self.error = error
        self.message = f"could not get torrents for {criterion}: {error.message}"
        super().__init__(self.message)


class SelectService:
    """
    Turns selection criteria into the set of torrent hashes to act on.

    The state filter and the category/tag queries each produce a set only when they
    were asked for; a criterion that wasn't given is skipped rather than treated as an
    empty set. When both are present their intersection is used, and explicit hashes
    are always added on top.
    """

    def __init__(self, client: QbittorrentApi):
        self.client = client

    def select(self, criteria: SelectionCriteria) -> TargetSet:
        if criteria.remove_all:
            return TargetSet.all()

        filter_hashes: Optional[Set[str]] = None
        if criteria.state_filter is not None:
            filter_hashes = self._get_filter_hashes(criteria.state_filter)

        category_hashes: Optional[Set[str]] = None
        if criteria.categories:
            category_hashes = self._get_category_hashes(criteria)

        matched = self._combine(filter_hashes, category_hashes)
        return TargetSet(matched | criteria.hashes)

    @staticmethod
    def _combine(
        filter_hashes: Optional[Set[str]], category_hashes: Optional[Set[str]]
    ) -> Set[str]:
        if filter_hashes is not None and category_hashes is not None:
            return filter_hashes & category_hashes
        if filter_hashes is not None:
            return filter_hashes
        if category_hashes is not None:
            return category_hashes
        return set()

    def _get_filter_hashes(self, state_filter: TorrentFilter) -> Set[str]:
        torrents = self._query(f"filter: {state_filter.value}", state_filter=state_filter)
        return {torrent.hash for torrent in torrents}

    def _get_category_hashes(self, criteria: SelectionCriteria) -> Set[str]:
        result: Set[str] = set()
        for category in sorted(criteria.categories):
            torrents = self._query(f"category: {category}", category=category)
            result.update(
                torrent.hash for torrent in torrents if criteria.accepts_tags(torrent)
            )
        return result

    def _query(self, criterion: str, **options) -> Sequence[Torrent]:
        try:
            torrents = self.client.get_torrents(**options)
        except QbittorrentError as e:
            raise SelectionError(criterion, e) from e
        logger.debug(f"{criterion} matched {len(torrents)} torrents")
        return torrents
