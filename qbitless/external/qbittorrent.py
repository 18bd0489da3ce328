import logging
from typing import Mapping, Optional, Protocol, Sequence, Any, MutableMapping

from qbittorrentapi import (
    APIConnectionError,
    APIError,
    Client,
    Forbidden403Error,
    HTTP400Error,
    HTTPError,
    LoginFailed,
    NotFound404Error,
)

from qbitless.domain.torrent import Torrent, TorrentFilter, split_tags
from qbitless.external.errors import ClientConnectionError, InvalidFilterError
from qbitless.external.result import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def parse_timeout(raw_timeout: Optional[str]) -> float:
    if raw_timeout is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ValueError(f"timeout must be a number of seconds, got {raw_timeout!r}")
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {raw_timeout!r}")
    return timeout


def qbittorrent_factory(args: Mapping) -> Client:
    # options left out fall back to the QBITTORRENTAPI_* environment variables
    kwargs: MutableMapping[str, Any] = {
        "REQUESTS_ARGS": {"timeout": parse_timeout(args.get("--timeout"))},
    }
    address = args.get("--address")
    if address:
        kwargs["host"] = address
    username = args.get("--username")
    if username:
        kwargs["username"] = username
    password = args.get("--password")
    if password:
        kwargs["password"] = password
    return Client(**kwargs)


def convert_torrent(torrent: Mapping) -> Torrent:
    return Torrent(
        hash=torrent["hash"],
        name=torrent.get("name", ""),
        state=torrent.get("state", ""),
        category=torrent.get("category", ""),
        tags=split_tags(torrent.get("tags")),
    )


class QbittorrentApi(Protocol):
    def connect(self):
        raise NotImplementedError

    def get_torrents(
        self,
        state_filter: Optional[TorrentFilter] = None,
        category: Optional[str] = None,
    ) -> Sequence[Torrent]:
        raise NotImplementedError

    def remove_torrents(
        self, hashes: Sequence[str], delete_files: bool
    ) -> CommandResult:
        raise NotImplementedError


class QbittorrentApiClient(QbittorrentApi):
    def __init__(self, client: Client):
        self.client = client

    def connect(self):
        try:
            self.client.auth_log_in()
        except LoginFailed as e:
            raise ClientConnectionError(f"login failed: {e}") from e
        except APIConnectionError as e:
            raise ClientConnectionError(f"connection failed: {e}") from e
        logger.info(f"logged in to qBittorrent at {self.client.host}")

    def get_torrents(
        self,
        state_filter: Optional[TorrentFilter] = None,
        category: Optional[str] = None,
    ) -> Sequence[Torrent]:
        status = state_filter.value if state_filter is not None else None
        # HTTP errors subclass APIConnectionError, so they are handled first
        try:
            torrents = self.client.torrents_info(status_filter=status, category=category)
        except (HTTP400Error, NotFound404Error) as e:
            raise InvalidFilterError(f"qBittorrent rejected the listing: {e}") from e
        except (APIConnectionError, Forbidden403Error) as e:
            raise ClientConnectionError(f"connection failed: {e}") from e
        return [convert_torrent(torrent) for torrent in torrents]

    def remove_torrents(
        self, hashes: Sequence[str], delete_files: bool
    ) -> CommandResult:
        try:
            self.client.torrents_delete(
                delete_files=delete_files, torrent_hashes=list(hashes)
            )
        except Forbidden403Error as e:
            raise ClientConnectionError(f"not authorized: {e}") from e
        except HTTPError as e:
            return CommandResult(error=str(e) or type(e).__name__, success=False)
        except APIConnectionError as e:
            raise ClientConnectionError(f"connection failed: {e}") from e
        except APIError as e:
            return CommandResult(error=str(e) or type(e).__name__, success=False)
        return CommandResult()
