"""A tool for removing torrents from the qBittorrent BitTorrent client.

Usage:
    qbitless [options] [-v ...] <command> [<args> ...]

Options:
    -a <address>, --address <address>       Address of the qBittorrent Web UI (default is http://localhost:8080).
    -u <username>, --username <username>    Web UI username.
    -p <password>, --password <password>    Web UI password.
    -t <seconds>, --timeout <seconds>       Timeout for each request to qBittorrent (default is 30).
    -h, --help  Show this screen.
    -v, --verbose   Verbose terminal output (multiple -v increase verbosity).

The available qbitless commands are:
    remove      Remove torrents selected by state, category, tags or hash (optionally with their data).

See 'qbitless <command> --help' for more information on a specific command.

"""
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Any

from colorama import Fore, init, deinit
from docopt import docopt

from qbitless.command.command import CommandError, CommandOutput
from qbitless.configuration import CommandCreator, command_factories
from qbitless.external.errors import (
    ClientConnectionError,
    QbittorrentError,
    RemoteRejectedError,
)
from qbitless.external.qbittorrent import qbittorrent_factory, QbittorrentApiClient
from qbitless.service.select import SelectionError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONNECTION = 2
EXIT_INTERRUPTED = 130


def print_error(message: str):
    print(Fore.RED + message, file=sys.stderr)


class Application:
    def __init__(self, args: Mapping, dependencies: Mapping):
        self.args = args
        self.dependencies = dependencies

    def run(self) -> int:
        try:
            return self._run()
        except KeyboardInterrupt:
            print_error("Cancelled")
            return EXIT_INTERRUPTED
        except ClientConnectionError as e:
            logger.warning(e, exc_info=True)
            print_error(f"ERROR: {e.message} - is qBittorrent running?")
            return EXIT_CONNECTION
        except SelectionError as e:
            logger.warning(e, exc_info=True)
            print_error(f"ERROR: {e.message}")
            if isinstance(e.error, ClientConnectionError):
                return EXIT_CONNECTION
            return EXIT_FAILURE
        except RemoteRejectedError as e:
            logger.warning(e, exc_info=True)
            print_error(f"ERROR: {e.message} ({e.removed} removed before the failure)")
            return EXIT_FAILURE
        except (QbittorrentError, CommandError) as e:
            logger.warning(e, exc_info=True)
            print_error(f"ERROR: {e.message}")
            return EXIT_FAILURE

    def _run(self) -> int:
        creator = CommandCreator(self.dependencies, command_factories)
        command, subcommand_args = creator.get_command(self.args)
        is_dry_run = subcommand_args.get("--dry-run")
        if is_dry_run:
            result: CommandOutput = command.dry_run()
            result.dry_run_display()
        else:
            result = command.run()
            result.display()
        return EXIT_OK


def parse_logging_level(args: Mapping) -> int:
    return int(args.get("--verbose", 0))


def get_logging_level(verbosity) -> int:
    base_loglevel = 30
    verbosity = min(verbosity, 2)
    return base_loglevel - (verbosity * 10)


def get_file_handler() -> logging.FileHandler:
    cwd_path = Path(os.getcwd())
    log_path_str = str(cwd_path / "qbitless.log")

    file_handler = logging.FileHandler(log_path_str, "w")

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file_handler.setFormatter(formatter)
    return file_handler


def get_dependencies(args: Mapping) -> Mapping[str, Any]:
    qbittorrent_client = qbittorrent_factory(args)
    return {
        "client": QbittorrentApiClient(qbittorrent_client),
    }


def main():
    args = docopt(__doc__, options_first=True)

    verbosity = parse_logging_level(args)
    level = get_logging_level(verbosity)
    logging.basicConfig(level=level)
    app_logger = logging.getLogger()
    app_logger.handlers = []

    if verbosity > 0:
        handler = get_file_handler()
        app_logger.addHandler(handler)

    init(autoreset=True)
    try:
        dependencies = get_dependencies(args)
        application = Application(args, dependencies)
        status = application.run()
    except Exception as e:
        logging.exception(str(e))
        print_error(f"ERROR: {e}")
        status = EXIT_FAILURE
    finally:
        deinit()
    sys.exit(status)
