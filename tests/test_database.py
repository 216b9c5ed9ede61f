"""
Store Failure Translation Tests
"""

import asyncio
import sqlite3

import pytest
from asyncpg import exceptions as pg_errors

from clubaccess.database import store_guard
from clubaccess.errors import DependencyUnavailable, PermissionDenied


async def fail_inside_guard(exc):
    async with store_guard("test operation"):
        raise exc


class TestStoreGuard:

    @pytest.mark.parametrize("exc", [
        pg_errors.ConnectionDoesNotExistError("connection was closed in the middle of operation"),
        pg_errors.CannotConnectNowError("the database system is starting up"),
        pg_errors.TooManyConnectionsError("sorry, too many clients already"),
        pg_errors.InterfaceError("connection is closed"),
        ConnectionRefusedError("connection refused"),
        asyncio.TimeoutError(),
        sqlite3.OperationalError("database is locked"),
    ])
    async def test_unreachable_store_is_dependency_unavailable(self, exc):
        with pytest.raises(DependencyUnavailable) as exc_info:
            await fail_inside_guard(exc)

        assert exc_info.value.__cause__ is exc

    async def test_schema_error_is_not_retryable(self):
        with pytest.raises(sqlite3.OperationalError):
            await fail_inside_guard(sqlite3.OperationalError("no such table: clubs"))

    async def test_domain_errors_pass_through(self):
        with pytest.raises(PermissionDenied):
            await fail_inside_guard(PermissionDenied())

    async def test_nested_guards_translate_once(self):
        with pytest.raises(DependencyUnavailable) as exc_info:
            async with store_guard("outer"):
                await fail_inside_guard(sqlite3.OperationalError("database is locked"))

        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
