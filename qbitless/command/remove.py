import logging
from dataclasses import dataclass

from colorama import Fore

from qbitless.command.command import Command, CommandOutput
from qbitless.domain.torrent import SelectionCriteria, TargetSet
from qbitless.service.remove import RemoveService
from qbitless.service.select import SelectService

logger = logging.getLogger(__name__)


def describe(target: TargetSet) -> str:
    if target.is_all:
        return "all torrents"
    return f"({len(target)}) torrents"


@dataclass
class RemoveOutput(CommandOutput):
    target: TargetSet
    batches: int = 0

    def display(self):
        if self.target.is_empty():
            print("No torrents found to remove")
        else:
            print(Fore.GREEN + f"successfully removed {describe(self.target)}")

    def dry_run_display(self):
        if self.target.is_empty():
            print("No torrents found to remove")
            return
        print(f"dry-run: {describe(self.target)} to be removed")
        print(f"dry-run: {self.batches} delete request(s) would be sent")
        for torrent_hash in self.target.as_request():
            print(f"{torrent_hash}")


class RemoveCommand(Command):
    def __init__(
        self,
        select_service: SelectService,
        remove_service: RemoveService,
        criteria: SelectionCriteria,
        delete_files: bool = False,
    ):
        self.select_service = select_service
        self.remove_service = remove_service
        self.criteria = criteria
        self.delete_files = delete_files

    def run(self) -> RemoveOutput:
        target = self.select_service.select(self.criteria)
        if target.is_empty():
            logger.info("no torrents found to remove")
            return RemoveOutput(target)
        logger.info(f"{describe(target)} to be removed")
        print(f"{describe(target)} to be removed")
        self.remove_service.remove(target, self.delete_files)
        return RemoveOutput(target, self.remove_service.count_batches(target))

    def dry_run(self) -> RemoveOutput:
        target = self.select_service.select(self.criteria)
        return RemoveOutput(target, self.remove_service.count_batches(target))
