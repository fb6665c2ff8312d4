# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/metamodel.py
# DESCRIPTION:    Firebird metadata model
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

"""firebird.ddl.metamodel - Firebird metadata model.

`FirebirdMetaModel` is the object a host metadata framework registers for
Firebird connections. It creates the per-connection `.ConnectionContext`, loads
child objects through `.CatalogReader` and provides DDL text for them.

Example::

    from firebird.driver import connect
    from firebird.ddl import FirebirdMetaModel

    model = FirebirdMetaModel()
    with connect('employee', user='SYSDBA', password='masterkey') as con:
        context = model.create_context(con)
        for proc in model.load_procedures(None, context):
            print(model.get_procedure_ddl(None, proc))
"""

from __future__ import annotations

import logging
from typing import ClassVar

from firebird.base.collections import DataList
from firebird.driver import Connection, DatabaseError

from . import formatter
from .catalog import CatalogReader
from .context import ConnectionContext
from .dialect import get_error_position
from .model import CatalogItem, Dependency, Function, Package, Procedure, Sequence, Trigger, View
from .progress import NullProgressMonitor, ProgressMonitor
from .provider import CatalogSourceReader, DDLProvider, SourceKind, SourceReader
from .types import CatalogError, ErrorPosition, UnsupportedFeatureError

log = logging.getLogger(__name__)

def _monitor(monitor: ProgressMonitor | None) -> ProgressMonitor:
    return NullProgressMonitor() if monitor is None else monitor

class FirebirdMetaModel(DDLProvider):
    """Firebird metadata model and DDL provider.

    The model itself is stateless, all per-connection state is held by
    `.ConnectionContext` returned from `create_context()`. Descriptors passed to
    `get_*_ddl()` methods carry their context.

    Methods accept `None` as progress monitor.
    """
    #: Class used to read PSQL source
    source_reader_class: ClassVar[type[SourceReader]] = CatalogSourceReader
    def _read_source(self, monitor: ProgressMonitor, kind: SourceKind, item: CatalogItem) -> str | None:
        context = item.context
        reader = self.get_source_reader(context)
        try:
            with context.open_session(monitor, f"Read source of {kind.value} '{item.name}'") as session:
                source = reader.read(session, kind, item.name)
        except UnsupportedFeatureError as exc:
            log.debug("Can't read source of %s '%s': %s", kind.value, item.name, exc)
            return None
        except DatabaseError as exc:
            raise CatalogError(f"Can't read source code of {kind.value} '{item.name}'") from exc
        return source if source else None
    def create_context(self, connection: Connection,
                       monitor: ProgressMonitor | None=None) -> ConnectionContext:
        """Returns initialized context for connection.

        Arguments:
            connection: Firebird connection.
            monitor:    Progress monitor.
        """
        context = ConnectionContext(connection)
        context.initialize(_monitor(monitor))
        return context
    def get_source_reader(self, context: ConnectionContext) -> SourceReader:
        """Returns source reader for context."""
        return self.source_reader_class(context)
    def supports_sequences(self, context: ConnectionContext) -> bool:
        """Always True, Firebird supports sequences (generators)."""
        return True
    def supports_triggers(self, context: ConnectionContext) -> bool:
        """Always True, Firebird supports table triggers."""
        return True
    def supports_database_triggers(self, context: ConnectionContext) -> bool:
        """Always True, triggers with no table are loaded as database triggers."""
        return True
    def load_sequences(self, monitor: ProgressMonitor | None,
                       context: ConnectionContext) -> DataList[Sequence]:
        """Returns sequences."""
        return CatalogReader(context).load_sequences(_monitor(monitor))
    def load_triggers(self, monitor: ProgressMonitor | None, context: ConnectionContext,
                      table: str | None=None) -> DataList[Trigger]:
        """Returns triggers of table, or database triggers when `table` is `None`."""
        return CatalogReader(context).load_triggers(_monitor(monitor), table)
    def load_procedures(self, monitor: ProgressMonitor | None,
                        context: ConnectionContext) -> DataList[Procedure]:
        """Returns standalone procedures followed by standalone PSQL functions.
        """
        monitor = _monitor(monitor)
        reader = CatalogReader(context)
        result = DataList(reader.load_procedures(monitor), Procedure, 'item.name')
        if not monitor.is_canceled():
            result.extend(reader.load_functions(monitor))
        result.freeze()
        return result
    def load_packages(self, monitor: ProgressMonitor | None,
                      context: ConnectionContext) -> DataList[Package]:
        """Returns packages."""
        return CatalogReader(context).load_packages(_monitor(monitor))
    def load_views(self, monitor: ProgressMonitor | None,
                   context: ConnectionContext) -> DataList[View]:
        """Returns views."""
        return CatalogReader(context).load_views(_monitor(monitor))
    def load_dependents(self, monitor: ProgressMonitor | None, context: ConnectionContext,
                        name: str) -> DataList[Dependency]:
        """Returns objects that depend on (use) object with `name`."""
        return CatalogReader(context).load_dependents(_monitor(monitor), name)
    def is_system_table(self, name: str | None, system_flag: int | None=None) -> bool:
        """Returns True if table is a system table.

        Arguments:
            name:        Table name.
            system_flag: `RDB$SYSTEM_FLAG` value, if known.

        Tables with `$` in name or with non-zero system flag are system tables.
        """
        if not name:
            return False
        return bool(system_flag) or '$' in name
    def get_error_position(self, error: Exception | str) -> ErrorPosition | None:
        """Returns zero-based position of error in SQL text, or `None`.

        Arguments:
            error: Exception raised by server, or its message.
        """
        return get_error_position(str(error))
    def get_plan(self, monitor: ProgressMonitor | None, context: ConnectionContext,
                 query: str) -> str | None:
        """Returns execution plan of query."""
        return context.get_plan(_monitor(monitor), query)
    def get_procedure_ddl(self, monitor: ProgressMonitor | None, procedure: Procedure) -> str | None:
        if (source := self._read_source(_monitor(monitor), SourceKind.PROCEDURE, procedure)) is None:
            return None
        return formatter.procedure_ddl(procedure, source)
    def get_function_ddl(self, monitor: ProgressMonitor | None, function: Function) -> str | None:
        if (source := self._read_source(_monitor(monitor), SourceKind.FUNCTION, function)) is None:
            return None
        return formatter.function_ddl(function, source)
    def get_view_ddl(self, monitor: ProgressMonitor | None, view: View) -> str | None:
        if (source := self._read_source(_monitor(monitor), SourceKind.VIEW, view)) is None:
            return None
        return formatter.view_ddl(view, source, view.context.version,
                                  view.context.opt_view_or_alter_min)
    def get_trigger_ddl(self, monitor: ProgressMonitor | None, trigger: Trigger) -> str | None:
        if (source := self._read_source(_monitor(monitor), SourceKind.TRIGGER, trigger)) is None:
            return None
        return formatter.trigger_ddl(trigger, source)
    def get_package_ddl(self, monitor: ProgressMonitor | None, package: Package) -> tuple[str, str]:
        return (package.entries.get('HEADER').source, package.entries.get('BODY').source)
    def get_sequence_ddl(self, monitor: ProgressMonitor | None, sequence: Sequence) -> str:
        return formatter.sequence_ddl(sequence, sequence.context.opt_generator_keyword)
