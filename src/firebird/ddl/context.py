# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/context.py
# DESCRIPTION:    Per-connection state and catalog sessions
# CREATED:        19.10.2026
#
# The contents of this file are subject to the MIT License
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
#
# Copyright (c) 2026 Firebird Project (www.firebirdsql.org)
# All Rights Reserved.
#
# Contributor(s): ______________________________________

"""firebird.ddl.context - Per-connection state and catalog sessions.

`ConnectionContext` is created once per connection. It holds the server version,
the compatibility flags derived from it, and the cache of `RDB$TYPES` values.
The cache is written once by `ConnectionContext.initialize()` and only read
afterwards.

All catalog queries run in short-lived `CatalogSession` instances opened with
`ConnectionContext.open_session()`. Each session uses its own read-only,
read-committed transaction that is released when the session ends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from firebird.base.types import Error
from firebird.driver import Connection, Cursor, Isolation, TraAccessMode, TransactionManager, tpb

from .dialect import FirebirdDialect, quote_identifier
from .model import MetaField
from .progress import NullProgressMonitor, ProgressMonitor
from .types import RoutineLoading, ServerVersion

log = logging.getLogger(__name__)

class CatalogSession:
    """Cursor over a read-only transaction used to query `RDB$` tables.

    Arguments:
        transaction: Transaction manager that owns the session cursor.
        cursor:      Cursor used by `select()` and `select_row()`.
        monitor:     Progress monitor of the operation.
        task:        Operation name (used in log and error messages).
    """
    def __init__(self, transaction: TransactionManager, cursor: Cursor,
                 monitor: ProgressMonitor, task: str):
        self._tra: TransactionManager = transaction
        #: Session cursor
        self.cursor: Cursor = cursor
        #: Progress monitor of the operation
        self.monitor: ProgressMonitor = monitor
        #: Operation name
        self.task: str = task
    def select(self, cmd: str, params: list | None=None) -> Iterator[dict[str, Any]]:
        """Executes query and yields rows as dictionaries keyed by column names.
        """
        self.cursor.execute(cmd, params)
        desc = self.cursor.description
        return ({desc[i][0]: row[i] for i in range(len(row))} for row in self.cursor)
    def select_row(self, cmd: str, params: list | None=None) -> dict[str, Any] | None:
        """Executes query and returns the first row as dictionary, or `None`."""
        self.cursor.execute(cmd, params)
        if (row := self.cursor.fetchone()) is None:
            return None
        return {self.cursor.description[i][0]: row[i] for i in range(len(row))}
    @contextmanager
    def nested(self) -> Iterator[CatalogSession]:
        """Context manager that returns session with another cursor in the same
        transaction. Use it to run queries while rows of this session are fetched.
        """
        with self._tra.cursor() as cursor:
            yield CatalogSession(self._tra, cursor, self.monitor, self.task)

class ConnectionContext:
    """Per-connection state used by metadata loaders and DDL providers.

    Arguments:
        connection: Firebird connection.

    Configuration options are class attributes, so they could be set for all
    contexts or overridden on an instance.
    """
    #: Configuration option: Always quote names in generated DDL.
    opt_always_quote: bool = False
    #: Configuration option: Keyword for generators/sequences ('SEQUENCE' or 'GENERATOR').
    opt_generator_keyword: str = 'SEQUENCE'
    #: Configuration option: Lowest server version that supports `CREATE OR ALTER VIEW`.
    opt_view_or_alter_min: ServerVersion = ServerVersion(2, 5, 0)
    def __init__(self, connection: Connection):
        self._con: Connection = connection
        self.__meta_fields: dict[str, dict[int, MetaField]] = {}
        #: SQL dialect
        self.dialect: FirebirdDialect = FirebirdDialect()
        #: Server version (`0.0.0` until `initialize()` is called)
        self.version: ServerVersion = ServerVersion()
    def __load_meta_fields(self, monitor: ProgressMonitor) -> None:
        try:
            with self.open_session(monitor, 'Load Firebird meta types') as session:
                for row in session.select('select RDB$FIELD_NAME, RDB$TYPE, RDB$TYPE_NAME,'
                                          ' RDB$SYSTEM_FLAG from RDB$TYPES'):
                    if monitor.is_canceled():
                        break
                    field = MetaField(row)
                    self.__meta_fields.setdefault(field.field_name, {})[field.type] = field
        except Error as exc:
            log.error("Error reading Firebird types: %s", exc)
    def initialize(self, monitor: ProgressMonitor | None=None) -> None:
        """Reads server version and loads `RDB$TYPES` into the meta type cache.

        Errors raised while loading meta types are logged and do not fail the
        initialization.
        """
        if monitor is None:
            monitor = NullProgressMonitor()
        self.version = ServerVersion.parse(self._con.info.firebird_version)
        log.debug("Firebird server version %s", self.version)
        self.__meta_fields.clear()
        self.__load_meta_fields(monitor)
    @contextmanager
    def open_session(self, monitor: ProgressMonitor, task: str) -> Iterator[CatalogSession]:
        """Context manager that returns `CatalogSession` over new read-only transaction.

        Arguments:
            monitor: Progress monitor of the operation.
            task:    Operation name.

        The transaction and cursor are closed on exit, including exit on error.
        """
        monitor.sub_task(task)
        with self._con.transaction_manager(tpb(Isolation.READ_COMMITTED_RECORD_VERSION,
                                               access_mode=TraAccessMode.READ)) as tra:
            with tra.cursor() as cursor:
                yield CatalogSession(tra, cursor, monitor, task)
    def get_meta_field_value(self, field_name: str, type_id: int) -> str | None:
        """Returns `RDB$TYPE_NAME` for `RDB$FIELD_NAME` and `RDB$TYPE`, or `None` when
        there is no such value.
        """
        if (field := self.__meta_fields.get(field_name, {}).get(type_id)) is not None:
            return field.type_name
        return None
    def get_meta_fields(self, field_name: str) -> dict[int, MetaField]:
        """Returns all cached `RDB$TYPES` values for `RDB$FIELD_NAME`."""
        return dict(self.__meta_fields.get(field_name, {}))
    def get_plan(self, monitor: ProgressMonitor, query: str) -> str | None:
        """Returns execution plan for query. The query is prepared, but not executed.
        """
        with self.open_session(monitor, 'Read execution plan') as session:
            stmt = session.cursor.prepare(query)
            try:
                return stmt.plan
            finally:
                stmt.free()
    def quote(self, ident: str) -> str:
        """Returns the identifier quoted according to dialect rules and `opt_always_quote`."""
        return quote_identifier(ident, self.opt_always_quote)
    @property
    def connection(self) -> Connection:
        """Firebird connection."""
        return self._con
    @property
    def routine_loading(self) -> RoutineLoading:
        """Strategy for rebuilding function definitions.

        Definitions are rebuilt row by row for `3.0` servers, and after reading all
        rows for others.
        """
        return RoutineLoading.IMMEDIATE if self.version.short == '3.0' else RoutineLoading.BATCH
    @property
    def supports_psql_functions(self) -> bool:
        """True if server supports PSQL functions and packages (3.0+)."""
        return self.version >= ServerVersion(3, 0, 0)
    @property
    def supports_type_of_column(self) -> bool:
        """True if procedure parameters could be declared as `TYPE OF COLUMN` (2.5+)."""
        return self.version >= ServerVersion(2, 5, 0)
    @property
    def supports_create_or_alter_view(self) -> bool:
        """True if server supports `CREATE OR ALTER VIEW` (2.5+)."""
        return self.version >= self.opt_view_or_alter_min
