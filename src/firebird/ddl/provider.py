# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/provider.py
# DESCRIPTION:    DDL provider and source reader interfaces
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

"""firebird.ddl.provider - Interfaces for DDL providers and source readers.

`DDLProvider` is the extension point a host framework calls to obtain DDL text
for an object. `SourceReader` is an optional capability that fetches PSQL source
of an object. The default implementation, `CatalogSourceReader`, reads it from
`RDB$` tables and reports source kinds the server cannot provide with
`.UnsupportedFeatureError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

from .types import ServerVersion, UnsupportedFeatureError

if TYPE_CHECKING:
    from .context import CatalogSession, ConnectionContext
    from .model import Function, Package, Procedure, Sequence, Trigger, View
    from .progress import ProgressMonitor

class SourceKind(Enum):
    """Kind of object with PSQL source."""
    PROCEDURE = 'procedure'
    FUNCTION = 'function'
    VIEW = 'view'
    TRIGGER = 'trigger'

class DDLProvider(ABC):
    """Abstract provider of DDL text for database objects.

    Methods return `None` when the DDL cannot be reconstructed (for example, the
    object source is not available).
    """
    @abstractmethod
    def get_procedure_ddl(self, monitor: ProgressMonitor, procedure: Procedure) -> str | None:
        """Returns `CREATE OR ALTER PROCEDURE` statement."""
    @abstractmethod
    def get_function_ddl(self, monitor: ProgressMonitor, function: Function) -> str | None:
        """Returns `CREATE OR ALTER FUNCTION` statement."""
    @abstractmethod
    def get_view_ddl(self, monitor: ProgressMonitor, view: View) -> str | None:
        """Returns `CREATE [OR ALTER] VIEW` statement."""
    @abstractmethod
    def get_trigger_ddl(self, monitor: ProgressMonitor, trigger: Trigger) -> str | None:
        """Returns `CREATE TRIGGER` statement."""
    @abstractmethod
    def get_package_ddl(self, monitor: ProgressMonitor, package: Package) -> tuple[str, str]:
        """Returns package header and body statements."""
    @abstractmethod
    def get_sequence_ddl(self, monitor: ProgressMonitor, sequence: Sequence) -> str:
        """Returns `CREATE SEQUENCE` statement."""

class SourceReader(ABC):
    """Abstract reader of PSQL source code.

    Arguments:
        context: Connection context.
    """
    def __init__(self, context: ConnectionContext):
        self._context: ConnectionContext = context
    @abstractmethod
    def supports(self, kind: SourceKind) -> bool:
        """Returns True if reader can provide source of given kind."""
    @abstractmethod
    def read(self, session: CatalogSession, kind: SourceKind, name: str) -> str | None:
        """Returns source of object, or `None` when object has no source.

        Raises:
            UnsupportedFeatureError: When source of given kind is not available.
        """

class CatalogSourceReader(SourceReader):
    """Reads PSQL source from `RDB$` system tables.
    """
    #: Query, source column and minimal server version for each source kind
    _queries: dict[SourceKind, tuple[str, str, ServerVersion]] = {
        SourceKind.PROCEDURE: ('select RDB$PROCEDURE_SOURCE from RDB$PROCEDURES'
                               ' where RDB$PROCEDURE_NAME = ?', 'RDB$PROCEDURE_SOURCE',
                               ServerVersion()),
        SourceKind.FUNCTION: ('select RDB$FUNCTION_SOURCE from RDB$FUNCTIONS'
                              ' where RDB$FUNCTION_NAME = ? and RDB$PACKAGE_NAME is null',
                              'RDB$FUNCTION_SOURCE', ServerVersion(3, 0, 0)),
        SourceKind.VIEW: ('select RDB$VIEW_SOURCE from RDB$RELATIONS where RDB$RELATION_NAME = ?',
                          'RDB$VIEW_SOURCE', ServerVersion()),
        SourceKind.TRIGGER: ('select RDB$TRIGGER_SOURCE from RDB$TRIGGERS'
                             ' where RDB$TRIGGER_NAME = ?', 'RDB$TRIGGER_SOURCE',
                             ServerVersion()),
        }
    def supports(self, kind: SourceKind) -> bool:
        return self._context.version >= self._queries[kind][2]
    def read(self, session: CatalogSession, kind: SourceKind, name: str) -> str | None:
        if not self.supports(kind):
            raise UnsupportedFeatureError(f"Server {self._context.version} does not provide"
                                          f" source of {kind.value}s")
        cmd, column, _ = self._queries[kind]
        if (row := session.select_row(cmd, [name])) is None:
            return None
        return row[column]
