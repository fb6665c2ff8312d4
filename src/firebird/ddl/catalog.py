# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/catalog.py
# DESCRIPTION:    Loading of object descriptors from Firebird system tables
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

"""firebird.ddl.catalog - Loading of object descriptors from `RDB$` system tables.

`CatalogReader` runs parameterized queries in short-lived catalog sessions and
maps result rows into descriptors from `firebird.ddl.model`.

All scans poll the progress monitor once per row. When cancellation is requested,
the scan stops without error and returns descriptors read so far. Driver errors
are re-raised as `.CatalogError` that names the object being loaded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from firebird.base.collections import DataList
from firebird.driver import DatabaseError

from .context import CatalogSession, ConnectionContext
from .model import (Dependency, Function, FunctionArgument, Package, Procedure, ProcedureParameter,
                    Sequence, Trigger, View, ViewColumn)
from .progress import ProgressMonitor
from .types import CatalogError, RoutineLoading

log = logging.getLogger(__name__)

_FIELD_COLUMNS = 'f.RDB$FIELD_TYPE, f.RDB$FIELD_SUB_TYPE, f.RDB$FIELD_SCALE, f.RDB$FIELD_PRECISION, ' \
                 'f.RDB$FIELD_LENGTH, f.RDB$CHARACTER_LENGTH'

class CatalogReader:
    """Loads object descriptors from `RDB$` system tables.

    Arguments:
        context: Connection context.
    """
    def __init__(self, context: ConnectionContext):
        self._context: ConnectionContext = context
    def _rows(self, session: CatalogSession, cmd: str,
              params: list | None=None) -> Iterator[dict[str, Any]]:
        for row in session.select(cmd, params):
            if session.monitor.is_canceled():
                log.debug("Task '%s' canceled", session.task)
                break
            yield row
    def load_sequences(self, monitor: ProgressMonitor) -> DataList[Sequence]:
        """Returns sequences (generators). Rows without name are skipped.
        """
        result = []
        try:
            with self._context.open_session(monitor, 'Load sequences') as session:
                for row in self._rows(session, 'select * from RDB$GENERATORS'):
                    if row.get('RDB$GENERATOR_NAME') is None:
                        continue
                    result.append(Sequence(self._context, row))
        except DatabaseError as exc:
            raise CatalogError("Can't load sequences") from exc
        return DataList(result, Sequence, 'item.name', frozen=True)
    def load_triggers(self, monitor: ProgressMonitor, table: str | None=None) -> DataList[Trigger]:
        """Returns triggers of table, or database triggers when `table` is `None`.

        Arguments:
            monitor: Progress monitor.
            table:   Table (or view) name.
        """
        result = []
        if table is None:
            cmd = 'select * from RDB$TRIGGERS where RDB$RELATION_NAME is null'
            params = None
            task = 'Load database triggers'
        else:
            cmd = 'select * from RDB$TRIGGERS where RDB$RELATION_NAME = ?'
            params = [table]
            task = f"Load triggers of table '{table}'"
        try:
            with self._context.open_session(monitor, task) as session:
                for row in self._rows(session, cmd, params):
                    if row.get('RDB$TRIGGER_NAME') is None:
                        continue
                    result.append(Trigger(self._context, row))
        except DatabaseError as exc:
            raise CatalogError(f"Can't load triggers of table '{table}'" if table
                               else "Can't load database triggers") from exc
        return DataList(result, Trigger, 'item.name', frozen=True)
    def load_procedure_parameters(self, session: CatalogSession, name: str) -> list[ProcedureParameter]:
        """Returns parameters of stored procedure, inputs first.

        Arguments:
            session: Catalog session.
            name:    Procedure name.
        """
        if self._context.supports_type_of_column:
            column = 'pp.RDB$RELATION_NAME, pp.RDB$FIELD_NAME'
        else:
            column = 'null as RDB$RELATION_NAME, null as RDB$FIELD_NAME'
        cmd = f"""select pp.RDB$PARAMETER_NAME, pp.RDB$PARAMETER_NUMBER, pp.RDB$PARAMETER_TYPE,
pp.RDB$DESCRIPTION, {column}, {_FIELD_COLUMNS}
from RDB$PROCEDURE_PARAMETERS pp join RDB$FIELDS f on f.RDB$FIELD_NAME = pp.RDB$FIELD_SOURCE
where pp.RDB$PROCEDURE_NAME = ?{' and pp.RDB$PACKAGE_NAME is null' if self._context.supports_psql_functions else ''}
order by pp.RDB$PARAMETER_TYPE, pp.RDB$PARAMETER_NUMBER"""
        try:
            return [ProcedureParameter(self._context, row) for row in session.select(cmd, [name])]
        except DatabaseError as exc:
            raise CatalogError(f"Can't load parameters of procedure '{name}'") from exc
    def load_function_arguments(self, session: CatalogSession, name: str) -> list[FunctionArgument]:
        """Returns arguments of standalone stored function ordered by position.
        Argument at position 0 is the return value.

        Arguments:
            session: Catalog session.
            name:    Function name.
        """
        cmd = f"""select fa.RDB$ARGUMENT_NAME, fa.RDB$ARGUMENT_POSITION, fa.RDB$DESCRIPTION,
fa.RDB$RELATION_NAME, fa.RDB$FIELD_NAME, {_FIELD_COLUMNS}
from RDB$FUNCTION_ARGUMENTS fa left join RDB$FIELDS f on f.RDB$FIELD_NAME = fa.RDB$FIELD_SOURCE
where fa.RDB$FUNCTION_NAME = ? and fa.RDB$PACKAGE_NAME is null
order by fa.RDB$ARGUMENT_POSITION"""
        try:
            return [FunctionArgument(self._context, row) for row in session.select(cmd, [name])]
        except DatabaseError as exc:
            raise CatalogError(f"Can't load arguments of function '{name}'") from exc
    def load_procedures(self, monitor: ProgressMonitor) -> DataList[Procedure]:
        """Returns standalone stored procedures with their parameters.
        """
        result = []
        cmd = 'select * from RDB$PROCEDURES'
        if self._context.supports_psql_functions:
            cmd += ' where RDB$PACKAGE_NAME is null'
        try:
            with self._context.open_session(monitor, 'Load procedures') as session:
                # Parameters are read after the procedure list, the session has one cursor
                rows = [row for row in self._rows(session, cmd)
                        if row.get('RDB$PROCEDURE_NAME') is not None]
                for row in rows:
                    if monitor.is_canceled():
                        break
                    params = self.load_procedure_parameters(session,
                                                            row['RDB$PROCEDURE_NAME'].strip())
                    result.append(Procedure(self._context, row, params))
        except DatabaseError as exc:
            raise CatalogError("Can't load procedures") from exc
        return DataList(result, Procedure, 'item.name', frozen=True)
    def load_functions(self, monitor: ProgressMonitor) -> DataList[Function]:
        """Returns standalone PSQL functions with reconstructed definitions.

        Servers older than 3.0 do not have PSQL functions, for them the result is
        empty. Definitions are rebuilt while rows are fetched for `3.0` servers
        (`.RoutineLoading.IMMEDIATE`), or after all rows are fetched for others
        (`.RoutineLoading.BATCH`).
        """
        result = []
        if not self._context.supports_psql_functions:
            log.debug("PSQL functions are not supported by server %s", self._context.version)
            return DataList(result, Function, 'item.name', frozen=True)
        cmd = 'select * from RDB$FUNCTIONS where RDB$PACKAGE_NAME is null' \
              ' and coalesce(RDB$LEGACY_FLAG, 0) = 0'
        try:
            with self._context.open_session(monitor, 'Load functions') as session:
                if self._context.routine_loading is RoutineLoading.IMMEDIATE:
                    with session.nested() as nested:
                        for row in self._rows(session, cmd):
                            if row.get('RDB$FUNCTION_NAME') is None:
                                continue
                            args = self.load_function_arguments(nested,
                                                                row['RDB$FUNCTION_NAME'].strip())
                            result.append(Function(self._context, row, args))
                else:
                    rows = [row for row in self._rows(session, cmd)
                            if row.get('RDB$FUNCTION_NAME') is not None]
                    for row in rows:
                        if monitor.is_canceled():
                            break
                        args = self.load_function_arguments(session,
                                                            row['RDB$FUNCTION_NAME'].strip())
                        result.append(Function(self._context, row, args))
        except DatabaseError as exc:
            raise CatalogError("Can't load functions") from exc
        return DataList(result, Function, 'item.name', frozen=True)
    def load_packages(self, monitor: ProgressMonitor) -> DataList[Package]:
        """Returns packages (3.0+). Each package carries `HEADER` and `BODY` entries.
        """
        result = []
        if not self._context.supports_psql_functions:
            log.debug("Packages are not supported by server %s", self._context.version)
            return DataList(result, Package, 'item.name', frozen=True)
        try:
            with self._context.open_session(monitor, 'Load packages') as session:
                for row in self._rows(session, 'select * from RDB$PACKAGES'):
                    if row.get('RDB$PACKAGE_NAME') is None:
                        continue
                    result.append(Package(self._context, row))
        except DatabaseError as exc:
            raise CatalogError("Can't load packages") from exc
        return DataList(result, Package, 'item.name', frozen=True)
    def load_views(self, monitor: ProgressMonitor) -> DataList[View]:
        """Returns views with their columns.
        """
        result = []
        try:
            with self._context.open_session(monitor, 'Load views') as session:
                rows = [row for row in self._rows(session, """select RDB$RELATION_NAME, RDB$VIEW_SOURCE,
RDB$DESCRIPTION, RDB$SYSTEM_FLAG from RDB$RELATIONS where RDB$VIEW_BLR is not null""")
                        if row.get('RDB$RELATION_NAME') is not None]
                for row in rows:
                    if monitor.is_canceled():
                        break
                    name = row['RDB$RELATION_NAME'].strip()
                    try:
                        columns = [ViewColumn(self._context, col) for col in
                                   session.select("""select RDB$FIELD_NAME, RDB$FIELD_POSITION, RDB$RELATION_NAME
from RDB$RELATION_FIELDS where RDB$RELATION_NAME = ? order by RDB$FIELD_POSITION""", [name])]
                    except DatabaseError as exc:
                        raise CatalogError(f"Can't load columns of view '{name}'") from exc
                    result.append(View(self._context, row, columns))
        except DatabaseError as exc:
            raise CatalogError("Can't load views") from exc
        return DataList(result, View, 'item.name', frozen=True)
    def load_dependents(self, monitor: ProgressMonitor, name: str) -> DataList[Dependency]:
        """Returns objects that depend on object with `name` (its "used by" list).
        """
        result = []
        try:
            with self._context.open_session(monitor, f"Load dependents of '{name}'") as session:
                for row in self._rows(session, 'select * from RDB$DEPENDENCIES'
                                      ' where RDB$DEPENDED_ON_NAME = ?', [name]):
                    if row.get('RDB$DEPENDENT_NAME') is None:
                        continue
                    result.append(Dependency(self._context, row))
        except DatabaseError as exc:
            raise CatalogError(f"Can't load dependents of '{name}'") from exc
        return DataList(result, Dependency, 'item.name', frozen=True)
