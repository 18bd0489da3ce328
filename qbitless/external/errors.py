class QbittorrentError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ClientConnectionError(QbittorrentError):
    """qBittorrent could not be reached or refused the credentials."""


class InvalidFilterError(QbittorrentError):
    """A state filter qBittorrent (or this tool) doesn't recognize."""


class RemoteRejectedError(QbittorrentError):
    def __init__(self, message, removed: int = 0):
        super().__init__(message)
        self.removed = removed
