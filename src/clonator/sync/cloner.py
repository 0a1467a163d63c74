"""Clone records into their computed directories with GitPython."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import git

from clonator.core.errors import ClonatorError
from clonator.core.schema import Record

logger = logging.getLogger(__name__)


class CloneError(ClonatorError):
    pass


class GitCloner:
    """Consumer callback that runs ``git clone`` for each record.

    With ``dry_run`` the commands are handed to ``echo`` instead of being run.
    """

    def __init__(
        self,
        use_ssh: bool = False,
        dry_run: bool = False,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.use_ssh = use_ssh
        self.dry_run = dry_run
        self.echo = echo

    def __call__(self, record: Record) -> None:
        self.clone(record)

    def clone(self, record: Record) -> Path:
        url = record.clone_source(self.use_ssh)
        directory = Path(record.directory)
        if self.dry_run:
            self.echo(f"mkdir -p {record.directory}")
            self.echo(f"git clone {url} {record.directory}")
            return directory

        logger.debug("git clone %s", record.directory)
        directory.mkdir(parents=True, exist_ok=True)
        try:
            git.Repo.clone_from(url, str(directory))
        except git.GitCommandError as e:
            stderr = (e.stderr or "").strip()
            raise CloneError(f"git clone into {record.directory} failed: {stderr or e}") from e
        return directory
