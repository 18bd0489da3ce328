import logging

from qbitless.domain.torrent import TargetSet
from qbitless.external.errors import RemoteRejectedError
from qbitless.external.qbittorrent import QbittorrentApi
from qbitless.external.result import CommandResult
from qbitless.service.batch import MAX_HASHES_PER_REQUEST, batch_requests, count_batches

logger = logging.getLogger(__name__)


class RemoveService:
    def __init__(self, client: QbittorrentApi, batch_size: int = MAX_HASHES_PER_REQUEST):
        self.client = client
        self.batch_size = batch_size

    def count_batches(self, target: TargetSet) -> int:
        return count_batches(len(target.as_request()), self.batch_size)

    def remove(self, target: TargetSet, delete_files: bool = False):
        hashes = target.as_request()
        removed = 0

        def remove_batch(start: int, end: int) -> CommandResult:
            nonlocal removed
            logger.info(f"removing batch [{start}:{end}) of {len(hashes)}")
            result = self.client.remove_torrents(hashes[start:end], delete_files)
            if result.success:
                removed += end - start
            return result

        result = batch_requests(hashes, remove_batch, self.batch_size)
        if not result.success:
            raise RemoteRejectedError(
                f"could not delete torrents: {result.error}", removed=removed
            )
