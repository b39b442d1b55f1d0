"""Unit tests for the git revision lookup behind the admin meta endpoint."""

import asyncio

import pytest
from pytest_mock import MockerFixture

from api_skeleton.api.routes.meta import RevisionLookupError, get_revision


def fake_process(
    mocker: MockerFixture, returncode: int, stdout: bytes, stderr: bytes = b""
) -> object:
    process = mocker.Mock()
    process.returncode = returncode
    process.communicate = mocker.AsyncMock(return_value=(stdout, stderr))
    return process


@pytest.mark.unit
class TestGetRevision:
    """Tests for get_revision."""

    async def test_returns_short_hash(self, mocker: MockerFixture) -> None:
        """The trimmed output of ``git rev-parse --short HEAD`` is returned."""
        create = mocker.patch(
            "asyncio.create_subprocess_exec",
            new=mocker.AsyncMock(return_value=fake_process(mocker, 0, b"abc1234\n")),
        )

        assert await get_revision() == "abc1234"
        assert create.await_args.args == ("git", "rev-parse", "--short", "HEAD")
        assert create.await_args.kwargs["stdout"] == asyncio.subprocess.PIPE

    async def test_non_zero_exit(self, mocker: MockerFixture) -> None:
        """A failing git command raises with its stderr."""
        mocker.patch(
            "asyncio.create_subprocess_exec",
            new=mocker.AsyncMock(
                return_value=fake_process(
                    mocker, 128, b"", b"fatal: not a git repository\n"
                )
            ),
        )

        with pytest.raises(RevisionLookupError, match="not a git repository"):
            await get_revision()

    async def test_git_missing(self, mocker: MockerFixture) -> None:
        """An unavailable git binary raises with the OS error as cause."""
        mocker.patch(
            "asyncio.create_subprocess_exec",
            new=mocker.AsyncMock(side_effect=FileNotFoundError("git")),
        )

        with pytest.raises(RevisionLookupError) as exc_info:
            await get_revision()

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
