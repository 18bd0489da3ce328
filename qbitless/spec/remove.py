""" Remove torrents from qBittorrent, selected by state, category, tags or hash.

Usage:
    qbitless remove [--dry-run] [--all] [--delete-files] [--filter <state>]
                    [--hashes <hashes>]... [--include-category <categories>]...
                    [--include-tags <tags>]... [--exclude-tags <tags>]...

Options:
    --dry-run                           Output what would be done instead of removing anything.
    --all                               Remove all torrents (every other option is ignored).
    --delete-files                      Also delete downloaded files of removed torrents.
    --filter <state>                    Remove torrents in this state: all, downloading, seeding, completed,
                                        paused, active, inactive, resumed, stalled, stalled_uploading,
                                        stalled_downloading, errored, stopped, running, checking, moving.
    --hashes <hashes>                   Comma separated hashes to remove.
    --include-category <categories>     Remove torrents from these categories. Comma separated.
    --include-tags <tags>               Only remove category torrents with one of these tags. Comma separated.
    --exclude-tags <tags>               Never remove category torrents with one of these tags. Comma separated.

When both --filter and --include-category are given, only torrents matching both are removed.
Hashes given with --hashes are always removed.
"""
from dataclasses import dataclass
from typing import FrozenSet, Mapping, Optional, Sequence

from qbitless.domain.torrent import SelectionCriteria, TorrentFilter
from qbitless.external.errors import InvalidFilterError


def split_list_option(values: Optional[Sequence[str]]) -> FrozenSet[str]:
    """Flattens repeated comma separated option values, dropping blanks."""
    result = set()
    for value in values or []:
        result.update(item.strip() for item in value.split(",") if item.strip())
    return frozenset(result)


def parse_filter(raw_filter: Optional[str]) -> Optional[TorrentFilter]:
    if not raw_filter:
        return None
    try:
        return TorrentFilter(raw_filter.strip().lower())
    except ValueError:
        raise InvalidFilterError(
            f"unknown filter {raw_filter!r}, expected one of: {', '.join(TorrentFilter.names())}"
        )


def parse_criteria(args: Mapping) -> SelectionCriteria:
    return SelectionCriteria(
        remove_all=bool(args.get("--all")),
        state_filter=parse_filter(args.get("--filter")),
        categories=split_list_option(args.get("--include-category")),
        include_tags=split_list_option(args.get("--include-tags")),
        exclude_tags=split_list_option(args.get("--exclude-tags")),
        hashes=split_list_option(args.get("--hashes")),
    )


@dataclass
class RemoveFlags:
    dry_run: bool
    delete_files: bool

    @staticmethod
    def parse(args: Mapping) -> "RemoveFlags":
        return RemoveFlags(
            dry_run=bool(args.get("--dry-run")),
            delete_files=bool(args.get("--delete-files")),
        )
