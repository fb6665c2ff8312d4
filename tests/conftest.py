# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           tests/conftest.py
# DESCRIPTION:    Common fixtures
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

"""firebird-ddl - Common fixtures

Catalog queries are served by `FakeConnection` that returns canned `RDB$` rows,
so tests do not need Firebird server or client library.
"""

from types import SimpleNamespace

import pytest
from firebird.ddl import context as ctx_module
from firebird.ddl.context import ConnectionContext

FB21 = 'WI-V2.1.7.18553 Firebird 2.1'
FB25 = 'WI-V2.5.9.27139 Firebird 2.5'
FB30 = 'WI-V3.0.5.33220 Firebird 3.0'
FB40 = 'LI-V4.0.2.2816 Firebird 4.0'

class FakeStatement:
    def __init__(self, plan: str):
        self.plan = plan
        self.freed = False
    def free(self) -> None:
        self.freed = True

class FakeCursor:
    """Cursor that returns rows registered in `FakeConnection`."""
    def __init__(self, connection: 'FakeConnection'):
        self._con = connection
        self._rows = iter([])
        self.description = ()
        self.closed = False
        self.statements = []
    def __enter__(self):
        return self
    def __exit__(self, exc_type, exc_value, traceback):
        self.closed = True
    def __iter__(self):
        return self
    def __next__(self):
        if (row := self.fetchone()) is None:
            raise StopIteration
        return row
    def execute(self, cmd, params=None):
        self._con.executed.append((cmd, params))
        rows = self._con.route(cmd, params)
        columns = list(rows[0].keys()) if rows else []
        self.description = tuple((name, None, None, None, None, None, True) for name in columns)
        self._rows = iter([tuple(row.get(name) for name in columns) for row in rows])
        return self
    def fetchone(self):
        return next(self._rows, None)
    def prepare(self, cmd):
        self._con.executed.append((cmd, None))
        stmt = FakeStatement(self._con.plan)
        self.statements.append(stmt)
        return stmt

class FakeTransactionManager:
    def __init__(self, connection: 'FakeConnection', tpb_value):
        self._con = connection
        self.tpb = tpb_value
        self.closed = False
        self.cursors = []
    def __enter__(self):
        return self
    def __exit__(self, exc_type, exc_value, traceback):
        self.closed = True
    def cursor(self) -> FakeCursor:
        cur = FakeCursor(self._con)
        self.cursors.append(cur)
        return cur

class FakeConnection:
    """Connection that serves catalog queries from registered responses.

    Responses are matched by substring of SQL command in order of registration.
    Response could be list of rows (dictionaries), exception instance (raised),
    or callable that takes query parameters and returns rows.
    """
    def __init__(self, version: str=FB30):
        self.info = SimpleNamespace(firebird_version=version)
        self.responses = []
        self.executed = []
        self.transactions = []
        self.plan = 'PLAN (RDB$DATABASE NATURAL)'
    def on(self, fragment: str, response) -> 'FakeConnection':
        self.responses.append((fragment, response))
        return self
    def route(self, cmd, params):
        for fragment, response in self.responses:
            if fragment in cmd:
                if isinstance(response, Exception):
                    raise response
                if callable(response):
                    return response(params)
                return [dict(row) for row in response]
        return []
    def transaction_manager(self, tpb_value=None) -> FakeTransactionManager:
        tra = FakeTransactionManager(self, tpb_value)
        self.transactions.append(tra)
        return tra

@pytest.fixture(autouse=True)
def fake_tpb(monkeypatch):
    # tpb() needs Firebird client library
    monkeypatch.setattr(ctx_module, 'tpb', lambda *args, **kwargs: b'tpb')

@pytest.fixture
def fb_types():
    return [{'RDB$FIELD_NAME': 'RDB$FIELD_TYPE                 ', 'RDB$TYPE': 14,
             'RDB$TYPE_NAME': 'TEXT                           ', 'RDB$SYSTEM_FLAG': 1},
            {'RDB$FIELD_NAME': 'RDB$FIELD_TYPE                 ', 'RDB$TYPE': 37,
             'RDB$TYPE_NAME': 'VARYING                        ', 'RDB$SYSTEM_FLAG': 1},
            {'RDB$FIELD_NAME': 'RDB$FIELD_TYPE                 ', 'RDB$TYPE': 99,
             'RDB$TYPE_NAME': 'FANCY                          ', 'RDB$SYSTEM_FLAG': 1},
            {'RDB$FIELD_NAME': 'RDB$OBJECT_TYPE                ', 'RDB$TYPE': 42,
             'RDB$TYPE_NAME': 'SPECIAL                        ', 'RDB$SYSTEM_FLAG': 1},
            ]

@pytest.fixture
def connection(fb_types):
    con = FakeConnection(FB30)
    con.on('from RDB$TYPES', fb_types)
    return con

@pytest.fixture
def context(connection):
    result = ConnectionContext(connection)
    result.initialize()
    return result

def make_context(version: str, *responses) -> ConnectionContext:
    """Returns initialized context over `FakeConnection` with given responses."""
    con = FakeConnection(version)
    for fragment, response in responses:
        con.on(fragment, response)
    result = ConnectionContext(con)
    result.initialize()
    return result

def param_row(name, number, direction, field_type, length=None, char_length=None,
              sub_type=None, scale=0, relation=None, field=None, description=None,
              precision=None):
    """Returns `RDB$PROCEDURE_PARAMETERS` row joined with `RDB$FIELDS`."""
    return {'RDB$PARAMETER_NAME': name.ljust(31), 'RDB$PARAMETER_NUMBER': number,
            'RDB$PARAMETER_TYPE': direction, 'RDB$DESCRIPTION': description,
            'RDB$RELATION_NAME': relation, 'RDB$FIELD_NAME': field,
            'RDB$FIELD_TYPE': field_type, 'RDB$FIELD_SUB_TYPE': sub_type,
            'RDB$FIELD_SCALE': scale, 'RDB$FIELD_PRECISION': precision, 'RDB$FIELD_LENGTH': length,
            'RDB$CHARACTER_LENGTH': char_length}

def argument_row(name, position, field_type, length=None, char_length=None,
                 sub_type=None, scale=0, relation=None, field=None, precision=None):
    """Returns `RDB$FUNCTION_ARGUMENTS` row joined with `RDB$FIELDS`."""
    return {'RDB$ARGUMENT_NAME': None if name is None else name.ljust(31),
            'RDB$ARGUMENT_POSITION': position, 'RDB$DESCRIPTION': None,
            'RDB$RELATION_NAME': relation, 'RDB$FIELD_NAME': field,
            'RDB$FIELD_TYPE': field_type, 'RDB$FIELD_SUB_TYPE': sub_type,
            'RDB$FIELD_SCALE': scale, 'RDB$FIELD_PRECISION': precision, 'RDB$FIELD_LENGTH': length,
            'RDB$CHARACTER_LENGTH': char_length}
