import logging
from collections import defaultdict
from typing import Sequence, Mapping, Any, DefaultDict, Callable

from docopt import docopt

from qbitless.command.command import (
    CommandError,
    CommandFactory,
    CommandFactoryResult,
)
from qbitless.command.remove import RemoveCommand
from qbitless.external.qbittorrent import QbittorrentApi
from qbitless.service.remove import RemoveService
from qbitless.service.select import SelectService
from qbitless.spec.remove import RemoveFlags, parse_criteria

logger = logging.getLogger(__name__)


def remove_factory(argv: Sequence[str], dependencies: Mapping) -> CommandFactoryResult:
    client: QbittorrentApi = dependencies["client"]

    # parse
    from qbitless.spec import remove as remove_command

    args = docopt(doc=remove_command.__doc__, argv=argv)
    criteria = parse_criteria(args)
    flags = RemoveFlags.parse(args)
    logger.debug(f"remove factory criteria {criteria} flags {flags}")

    client.connect()
    command = RemoveCommand(
        SelectService(client), RemoveService(client), criteria, flags.delete_files
    )
    return command, args


class InvalidCommandFactory(CommandFactory):
    def __call__(
        self, argv: Sequence[str], dependencies: Mapping[str, Any]
    ) -> CommandFactoryResult:
        name = argv[0] if argv else ""
        raise CommandError(
            f"Invalid command: {name!r}. See 'qbitless --help' for the available commands."
        )


invalid_factory: Callable[[], CommandFactory] = InvalidCommandFactory

command_factories: DefaultDict[Any, CommandFactory] = defaultdict(
    invalid_factory,
    {
        "remove": remove_factory,
    },
)


class CommandCreator:
    def __init__(
        self,
        dependencies: Mapping[str, Any],
        factories: Mapping[str, CommandFactory],
    ):
        self.dependencies = dependencies
        self.factories = factories

    def get_command(self, args: Mapping) -> CommandFactoryResult:
        # top-level options are dropped, the subcommand parses its own argv
        command = args.get("<command>")
        factory = self.factories[command]
        argv = [args["<command>"]] + args["<args>"]
        return factory(argv, self.dependencies)
