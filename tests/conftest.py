"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and log
directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from toado.adapters.sqlite import (
    DatabaseConnection,
    SqliteProjectRepository,
    SqliteTaskRepository,
)
from toado.commands import Dispatcher
from toado.models import AppConfig
from toado.services import StorageService

# ---------------------------------------------------------------------------
# Platform directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path*.

    Also resets the logger singleton so every test gets a fresh log file.
    """
    import toado.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("toado").handlers.clear()

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "log"

    with (
        patch("toado.config.user_config_dir", return_value=str(config_dir)),
        patch("toado.config.user_data_dir", return_value=str(data_dir)),
        patch("toado.utils.logger.user_log_dir", return_value=str(log_dir)),
    ):
        yield tmp_path

    for handler in logging.getLogger("toado").handlers:
        handler.close()
    logging.getLogger("toado").handlers.clear()
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "toado.db"


@pytest.fixture
def database(db_path):
    """Provide an open DatabaseConnection on a temp-file database."""
    with DatabaseConnection(db_path) as db:
        yield db


@pytest.fixture
def task_repo(database):
    return SqliteTaskRepository(database)


@pytest.fixture
def project_repo(database):
    return SqliteProjectRepository(database)


@pytest.fixture
def storage(task_repo, project_repo):
    return StorageService(task_repo, project_repo)


@pytest.fixture
def dispatcher(storage):
    return Dispatcher(storage, AppConfig())
