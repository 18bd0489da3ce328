import pytest
from pytest_mock import MockerFixture

from qbitless.command.remove import RemoveCommand
from qbitless.domain.torrent import SelectionCriteria, TargetSet
from qbitless.external.errors import RemoteRejectedError
from qbitless.service.remove import RemoveService
from qbitless.service.select import SelectService


def create_command(mocker: MockerFixture, target: TargetSet, delete_files=False):
    select_service = mocker.Mock(spec=SelectService)
    select_service.select.return_value = target
    remove_service = mocker.Mock(spec=RemoveService)
    remove_service.count_batches.return_value = 1
    criteria = SelectionCriteria(hashes=frozenset({"a"}))
    command = RemoveCommand(select_service, remove_service, criteria, delete_files)
    return command, select_service, remove_service


def test_remove_run(mocker: MockerFixture):
    target = TargetSet({"a", "b"})
    command, select_service, remove_service = create_command(mocker, target, True)

    command.run()

    select_service.select.assert_called_once_with(command.criteria)
    remove_service.remove.assert_called_once_with(target, True)


def test_remove_run_output(mocker: MockerFixture, capsys):
    command, _, _ = create_command(mocker, TargetSet({"a", "b"}))

    output = command.run()
    output.display()

    result = capsys.readouterr().out
    assert "(2) torrents to be removed" in result
    assert "successfully removed (2) torrents" in result


def test_remove_all_run_output(mocker: MockerFixture, capsys):
    command, _, remove_service = create_command(mocker, TargetSet.all())

    output = command.run()
    output.display()

    remove_service.remove.assert_called_once_with(TargetSet.all(), False)
    result = capsys.readouterr().out
    assert "all torrents to be removed" in result
    assert "successfully removed all torrents" in result


def test_remove_run_nothing_found(mocker: MockerFixture, capsys):
    command, _, remove_service = create_command(mocker, TargetSet())

    output = command.run()
    output.display()

    remove_service.remove.assert_not_called()
    assert capsys.readouterr().out == "No torrents found to remove\n"


def test_remove_run_rejected(mocker: MockerFixture):
    command, _, remove_service = create_command(mocker, TargetSet({"a"}))
    remove_service.remove.side_effect = RemoteRejectedError("rejected", removed=0)

    with pytest.raises(RemoteRejectedError):
        command.run()


def test_remove_dry_run(mocker: MockerFixture):
    command, _, remove_service = create_command(mocker, TargetSet({"a", "b"}))

    command.dry_run()

    remove_service.remove.assert_not_called()
    remove_service.count_batches.assert_called_once_with(TargetSet({"a", "b"}))


def test_remove_dry_run_output(mocker: MockerFixture, capsys):
    command, _, _ = create_command(mocker, TargetSet({"b", "a"}))

    output = command.dry_run()
    output.dry_run_display()

    result = capsys.readouterr().out
    assert result == "\n".join([
        "dry-run: (2) torrents to be removed",
        "dry-run: 1 delete request(s) would be sent",
        "a",
        "b",
    ]) + "\n"


def test_remove_dry_run_all_output(mocker: MockerFixture, capsys):
    command, _, _ = create_command(mocker, TargetSet.all())

    output = command.dry_run()
    output.dry_run_display()

    result = capsys.readouterr().out
    assert result.startswith("dry-run: all torrents to be removed\n")
