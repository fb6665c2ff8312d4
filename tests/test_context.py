# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           tests/test_context.py
# DESCRIPTION:    Tests for firebird.ddl.context module
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


"""firebird-ddl - Tests for firebird.ddl.context module
"""

import logging

import pytest
from firebird.driver import DatabaseError
from firebird.ddl.context import *
from firebird.ddl.progress import CancellableMonitor, NullProgressMonitor
from firebird.ddl.types import RoutineLoading, ServerVersion

from conftest import FB21, FB25, FB30, FB40, FakeConnection, make_context

def test_01_Initialize(context):
    assert context.version == ServerVersion(3, 0, 5)
    assert context.get_meta_field_value('RDB$FIELD_TYPE', 37) == 'VARYING'
    assert context.get_meta_field_value('RDB$FIELD_TYPE', 14) == 'TEXT'
    assert context.get_meta_field_value('RDB$FIELD_TYPE', 1000) is None
    assert context.get_meta_field_value('RDB$UNKNOWN', 1) is None
    fields = context.get_meta_fields('RDB$FIELD_TYPE')
    assert set(fields) == {14, 37, 99}
    assert fields[37].field_name == 'RDB$FIELD_TYPE'
    assert fields[37].system_flag == 1
    assert context.get_meta_fields('RDB$UNKNOWN') == {}

def test_02_InitializeTypesError(caplog):
    con = FakeConnection(FB30)
    con.on('from RDB$TYPES', DatabaseError('Table unknown RDB$TYPES'))
    ctx = ConnectionContext(con)
    with caplog.at_level(logging.ERROR, logger='firebird.ddl.context'):
        ctx.initialize()
    assert ctx.version == ServerVersion(3, 0, 5)
    assert ctx.get_meta_field_value('RDB$FIELD_TYPE', 37) is None
    assert 'Error reading Firebird types' in caplog.text

def test_03_InitializeCanceled(connection):
    ctx = ConnectionContext(connection)
    monitor = CancellableMonitor()
    monitor.cancel()
    ctx.initialize(monitor)
    assert ctx.get_meta_fields('RDB$FIELD_TYPE') == {}
    assert monitor.tasks == ['Load Firebird meta types']

def test_04_Compatibility():
    ctx = make_context(FB30)
    assert ctx.routine_loading is RoutineLoading.IMMEDIATE
    assert ctx.supports_psql_functions
    assert ctx.supports_create_or_alter_view
    ctx = make_context(FB40)
    assert ctx.routine_loading is RoutineLoading.BATCH
    assert ctx.supports_psql_functions
    ctx = make_context(FB25)
    assert ctx.routine_loading is RoutineLoading.BATCH
    assert not ctx.supports_psql_functions
    assert ctx.supports_create_or_alter_view
    assert ctx.supports_type_of_column
    ctx = make_context(FB21)
    assert not ctx.supports_type_of_column
    assert not ctx.supports_create_or_alter_view
    # Unknown version string
    ctx = make_context('Firebird')
    assert ctx.version == ServerVersion(0, 0, 0)
    assert ctx.routine_loading is RoutineLoading.BATCH
    assert not ctx.supports_create_or_alter_view

def test_05_Session(connection):
    ctx = ConnectionContext(connection)
    connection.on('from RDB$DATABASE', [{'RDB$CHARACTER_SET_NAME': 'UTF8', 'RDB$RELATION_ID': 128}])
    with ctx.open_session(NullProgressMonitor(), 'Read database') as session:
        assert session.task == 'Read database'
        rows = list(session.select('select * from RDB$DATABASE'))
        assert rows == [{'RDB$CHARACTER_SET_NAME': 'UTF8', 'RDB$RELATION_ID': 128}]
        assert session.select_row('select * from RDB$DATABASE')['RDB$RELATION_ID'] == 128
        assert session.select_row('select * from RDB$CHARACTER_SETS') is None
        with session.nested() as nested:
            assert nested.cursor is not session.cursor
            assert nested.monitor is session.monitor
    tra = connection.transactions[-1]
    assert tra.tpb == b'tpb'
    assert tra.closed
    assert len(tra.cursors) == 2
    assert all(cur.closed for cur in tra.cursors)

def test_06_SessionReleasedOnError(connection):
    ctx = ConnectionContext(connection)
    connection.on('from RDB$RELATIONS', DatabaseError('Connection lost'))
    with pytest.raises(DatabaseError):
        with ctx.open_session(NullProgressMonitor(), 'Load relations') as session:
            list(session.select('select * from RDB$RELATIONS'))
    tra = connection.transactions[-1]
    assert tra.closed
    assert tra.cursors[0].closed

def test_07_Plan(connection):
    ctx = ConnectionContext(connection)
    connection.plan = 'PLAN (EMPLOYEE NATURAL)'
    assert ctx.get_plan(NullProgressMonitor(), 'select * from EMPLOYEE') == 'PLAN (EMPLOYEE NATURAL)'
    cur = connection.transactions[-1].cursors[0]
    assert cur.statements[0].freed
    assert ('select * from EMPLOYEE', None) in connection.executed

def test_08_Options(context):
    assert context.quote('EMPLOYEE') == 'EMPLOYEE'
    assert context.quote('Employee') == '"Employee"'
    context.opt_always_quote = True
    assert context.quote('EMPLOYEE') == '"EMPLOYEE"'
    assert ConnectionContext.opt_always_quote is False
    assert context.opt_generator_keyword == 'SEQUENCE'
    context.opt_view_or_alter_min = ServerVersion(4, 0, 0)
    assert not context.supports_create_or_alter_view
    assert context.dialect.dual_table == 'RDB$DATABASE'
