# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/formatter.py
# DESCRIPTION:    Reconstruction of DDL statements from catalog descriptors
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

"""firebird.ddl.formatter - Reconstruction of DDL statements.

Functions in this module build `CREATE` statements from descriptors defined in
`firebird.ddl.model` and PSQL source text. They do not query the database.
Optional parts (parameter lists, `RETURNS` clause, comments) are omitted when
the descriptor does not carry them, so the result is always a complete
statement.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import ServerVersion

if TYPE_CHECKING:
    from .model import CatalogItem, Function, Package, Procedure, RoutineParameter, Sequence, Trigger, View

#: Body used when PSQL source is not available
EMPTY_BODY = 'BEGIN\nEND'

def escape_single_quotes(text: str) -> str:
    """Returns `text` with any single quotes escaped (doubled).

    Arguments:
        text: Text to be escaped.
    """
    return text.replace("'", "''")

def _param_sql(param: RoutineParameter) -> str:
    return f'{param.get_quoted_name()} {param.get_sql_definition()}'

def comment_ddl(kind: str, item: CatalogItem) -> str:
    """Returns `COMMENT ON` statement for object.

    Arguments:
        kind: Object kind keyword, e.g. `PROCEDURE` or `PACKAGE`.
        item: Object descriptor.

    Comment is set to `NULL` when object has no description.
    """
    comment = 'NULL' if item.description is None \
        else f"'{escape_single_quotes(item.description)}'"
    return f'COMMENT ON {kind} {item.get_quoted_name()} IS {comment}'

def procedure_ddl(procedure: Procedure, source: str | None) -> str:
    """Returns `CREATE OR ALTER PROCEDURE` statement.

    Arguments:
        procedure: Procedure descriptor.
        source:    PSQL body of the procedure.

    Input parameters are listed in parentheses after the procedure name, output
    parameters in the `RETURNS` clause. Both parts are omitted when empty.
    """
    result = f'CREATE OR ALTER PROCEDURE {procedure.get_quoted_name()}'
    if inputs := procedure.input_params:
        result += f" ({', '.join(_param_sql(p) for p in inputs)})"
    result += '\n'
    if outputs := procedure.output_params:
        result += 'RETURNS (\n' + ',\n'.join(f'\t{_param_sql(p)}' for p in outputs) + '\n)\n'
    return f'{result}AS\n{source or EMPTY_BODY}'

def function_ddl(function: Function, source: str | None) -> str:
    """Returns `CREATE OR ALTER FUNCTION` statement, followed by `COMMENT ON FUNCTION`
    when the function has a description.

    Arguments:
        function: Function descriptor.
        source:   PSQL body of the function.
    """
    name = function.get_quoted_name()
    result = f"CREATE OR ALTER FUNCTION {name} " \
             f"({', '.join(_param_sql(p) for p in function.input_params)})\n"
    if (ret := function.returns) is not None:
        result += f"RETURNS {ret.get_sql_definition()}{' DETERMINISTIC' if function.deterministic else ''}\n"
    result += f'AS\n{source or EMPTY_BODY}'
    if function.description:
        result += f'\n\n{comment_ddl("FUNCTION", function)}'
    return result

def view_ddl(view: View, source: str | None,
             version: ServerVersion, min_version: ServerVersion=ServerVersion(2, 5, 0)) -> str:
    """Returns `CREATE VIEW` statement.

    Arguments:
        view:        View descriptor.
        source:      SELECT statement that defines the view.
        version:     Server version.
        min_version: Lowest server version that supports `CREATE OR ALTER VIEW`.
    """
    result = f"CREATE {'OR ALTER ' if version >= min_version else ''}VIEW {view.get_quoted_name()}"
    if columns := view.columns:
        result += f" ({', '.join(c.get_quoted_name() for c in columns)})"
    return f"{result}\nAS\n{source or ''}"

def trigger_ddl(trigger: Trigger, source: str | None) -> str:
    """Returns `CREATE TRIGGER` statement.

    Database event and DDL triggers are not bound to a table and have no `FOR` clause.
    """
    result = f'CREATE TRIGGER {trigger.get_quoted_name()} '
    if not trigger.is_db_trigger() and trigger.relation_name:
        result += f'FOR {trigger.context.quote(trigger.relation_name)} '
    return f'{result}{trigger.get_type_as_string()}\n{source or EMPTY_BODY}'

def package_ddl(package: Package) -> tuple[str, str]:
    """Returns `CREATE OR ALTER PACKAGE` and `RECREATE PACKAGE BODY` statements.

    The result has always two elements. Missing header or body source is replaced
    by empty `BEGIN END` block.
    """
    name = package.get_quoted_name()
    header = f'CREATE OR ALTER PACKAGE {name}\nAS\n{package.header or EMPTY_BODY};\n'
    if package.description:
        header += f'\n{comment_ddl("PACKAGE", package)};\n'
    body = f'RECREATE PACKAGE BODY {name}\nAS\n{package.body or EMPTY_BODY};\n'
    return (header, body)

def sequence_ddl(sequence: Sequence, keyword: str='SEQUENCE') -> str:
    """Returns `CREATE SEQUENCE` (or `CREATE GENERATOR`) statement.

    `START WITH` and `INCREMENT BY` are included only when known.
    """
    result = f'CREATE {keyword} {sequence.get_quoted_name()}'
    if sequence.initial_value is not None:
        result += f' START WITH {sequence.initial_value}'
    if sequence.increment is not None:
        result += f' INCREMENT BY {sequence.increment}'
    return result
