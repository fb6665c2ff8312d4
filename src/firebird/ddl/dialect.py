# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/dialect.py
# DESCRIPTION:    Firebird SQL dialect description
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

"""firebird.ddl.dialect - Description of the Firebird SQL dialect.

`FirebirdDialect` tells a host SQL editor how Firebird differs from generic SQL:
which words start DDL statements, how PSQL blocks are delimited, which built-in
functions exist, and when identifiers must be quoted.
"""

from __future__ import annotations

import re
from typing import ClassVar

from .types import ErrorPosition

#: Reserved words of Firebird 3.0 and newer.
RESERVED_WORDS = frozenset(['ADD', 'ADMIN', 'ALL', 'ALTER', 'AND', 'ANY', 'AS', 'AT',
                            'AVG', 'BEGIN', 'BETWEEN', 'BIGINT', 'BINARY', 'BIT_LENGTH',
                            'BLOB', 'BOOLEAN', 'BOTH', 'BY', 'CASE', 'CAST', 'CHAR',
                            'CHAR_LENGTH', 'CHARACTER', 'CHARACTER_LENGTH', 'CHECK',
                            'CLOSE', 'COLLATE', 'COLUMN', 'COMMENT', 'COMMIT', 'CONNECT',
                            'CONSTRAINT', 'CORR', 'COUNT', 'COVAR_POP', 'COVAR_SAMP',
                            'CREATE', 'CROSS', 'CURRENT', 'CURRENT_CONNECTION',
                            'CURRENT_DATE', 'CURRENT_ROLE', 'CURRENT_TIME',
                            'CURRENT_TIMESTAMP', 'CURRENT_TRANSACTION', 'CURRENT_USER',
                            'CURSOR', 'DATE', 'DAY', 'DEC', 'DECFLOAT', 'DECIMAL',
                            'DECLARE', 'DEFAULT', 'DELETE', 'DELETING', 'DETERMINISTIC',
                            'DISCONNECT', 'DISTINCT', 'DOUBLE', 'DROP', 'ELSE', 'END',
                            'ESCAPE', 'EXECUTE', 'EXISTS', 'EXTERNAL', 'EXTRACT', 'FALSE',
                            'FETCH', 'FILTER', 'FLOAT', 'FOR', 'FOREIGN', 'FROM', 'FULL',
                            'FUNCTION', 'GDSCODE', 'GLOBAL', 'GRANT', 'GROUP', 'HAVING',
                            'HOUR', 'IN', 'INDEX', 'INNER', 'INSENSITIVE', 'INSERT',
                            'INSERTING', 'INT', 'INT128', 'INTEGER', 'INTO', 'IS', 'JOIN',
                            'LATERAL', 'LEADING', 'LEFT', 'LIKE', 'LOCAL', 'LOCALTIME',
                            'LOCALTIMESTAMP', 'LONG', 'LOWER', 'MAX', 'MERGE', 'MIN',
                            'MINUTE', 'MONTH', 'NATIONAL', 'NATURAL', 'NCHAR', 'NO', 'NOT',
                            'NULL', 'NUMERIC', 'OCTET_LENGTH', 'OF', 'OFFSET', 'ON',
                            'ONLY', 'OPEN', 'OR', 'ORDER', 'OUTER', 'OVER', 'PARAMETER',
                            'PLAN', 'POSITION', 'POST_EVENT', 'PRECISION', 'PRIMARY',
                            'PROCEDURE', 'RDB$DB_KEY', 'RDB$RECORD_VERSION', 'REAL',
                            'RECORD_VERSION', 'RECREATE', 'RECURSIVE', 'REFERENCES',
                            'RELEASE', 'RETURN', 'RETURNING_VALUES', 'RETURNS', 'REVOKE',
                            'RIGHT', 'ROLLBACK', 'ROW', 'ROW_COUNT', 'ROWS', 'SAVEPOINT',
                            'SCROLL', 'SECOND', 'SELECT', 'SENSITIVE', 'SET', 'SIMILAR',
                            'SMALLINT', 'SOME', 'SQLCODE', 'SQLSTATE', 'START',
                            'STDDEV_POP', 'STDDEV_SAMP', 'SUM', 'TABLE', 'THEN', 'TIME',
                            'TIMESTAMP', 'TO', 'TRAILING', 'TRIGGER', 'TRIM', 'TRUE',
                            'UNION', 'UNIQUE', 'UNKNOWN', 'UPDATE', 'UPDATING', 'UPPER',
                            'USER', 'USING', 'VALUE', 'VALUES', 'VAR_POP', 'VAR_SAMP',
                            'VARBINARY', 'VARCHAR', 'VARIABLE', 'VARYING', 'VIEW', 'WHEN',
                            'WHERE', 'WHILE', 'WINDOW', 'WITH', 'WITHOUT', 'YEAR'])

_IDENT_START = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
_IDENT_CHARS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789$_'

#: Error position reported by server, e.g. "Token unknown - line 3, column 14"
ERROR_POSITION_PATTERN = re.compile(r' line ([0-9]+), column ([0-9]+)')

def needs_quoting(ident: str | None, always: bool=False) -> bool:
    """Returns True if SQL identifier must be enclosed in double quotes.

    Arguments:
        ident:  Identifier.
        always: When True, any non-empty identifier needs quoting.
    """
    if not ident:
        return False
    if always:
        return True
    if ident[0] not in _IDENT_START:
        return True
    for char in ident:
        if char not in _IDENT_CHARS:
            return True
    return ident in RESERVED_WORDS

def quote_identifier(ident: str, always: bool=False) -> str:
    """Returns the identifier, quoted if necessary. Double quotes inside quoted
    identifier are doubled.
    """
    if needs_quoting(ident, always):
        ident = ident.replace('"', '""')
        return f'"{ident}"'
    return ident

def get_error_position(message: str) -> ErrorPosition | None:
    """Returns zero-based position of error in SQL text, parsed from server error message.

    Arguments:
        message: Error message that may contain ` line N, column M` fragment.

    Returns:
        `.ErrorPosition`, or `None` when message does not contain position information.
    """
    if message and (match := ERROR_POSITION_PATTERN.search(message)):
        return ErrorPosition(int(match.group(1)) - 1, int(match.group(2)) - 1)
    return None

class FirebirdDialect:
    """Firebird SQL dialect.
    """
    #: Dialect name
    name: ClassVar[str] = 'Firebird'
    #: Keywords that start DDL statements
    ddl_keywords: ClassVar[tuple[str, ...]] = ('CREATE', 'ALTER', 'DROP', 'EXECUTE', 'DATABASE',
                                               'SHADOW', 'DOMAIN', 'TABLE', 'INDEX', 'VIEW',
                                               'RECREATE', 'TRIGGER', 'PROCEDURE', 'FUNCTION',
                                               'PACKAGE', 'BODY', 'FILTER', 'SEQUENCE',
                                               'EXCEPTION', 'COLLATION', 'ROLE', 'COMMENT')
    #: Strings that start PSQL block
    block_headers: ClassVar[tuple[str, ...]] = ('EXECUTE BLOCK', 'DECLARE')
    #: Pairs of PSQL block delimiters
    block_bounds: ClassVar[tuple[tuple[str, str], ...]] = (('BEGIN', 'END'),)
    #: Built-in functions
    functions: ClassVar[tuple[str, ...]] = (
        # Date and time
        'CURRENT_CONNECTION', 'CURRENT_DATE', 'CURRENT_TIME', 'CURRENT_TIMESTAMP',
        'DATEADD', 'DATEDIFF', 'DOW', 'EXTRACT',
        # String
        'ASCII_CHAR', 'ASCII_VAL', 'BIT_LENGTH', 'CHAR_LENGTH', 'CHAR_TO_UUID',
        'CURRENT_ROLE', 'CURRENT_USER', 'GEN_UUID', 'LPAD', 'LEFT', 'LIST', 'LOWER',
        'OCTET_LENGTH', 'OVERLAY', 'POSITION', 'RDB$GET_CONTEXT', 'RDB$SET_CONTEXT',
        'REPLACE', 'REVERSE', 'RIGHT', 'RPAD', 'SUBSTRING', 'TRIM', 'UPPER', 'UUID_TO_CHAR',
        # Math
        'ABS', 'ACOS', 'ASIN', 'ATAN', 'ATAN2', 'AVG', 'BIN_AND', 'BIN_OR', 'BIN_SHL',
        'BIN_SHR', 'BIN_XOR', 'CEILING', 'COS', 'COSH', 'COT', 'COUNT', 'DIV', 'EXP',
        'FLOOR', 'GEN_ID', 'HASH', 'LN', 'LOG', 'LOG10', 'MAX', 'MAXVALUE', 'MIN',
        'MINVALUE', 'MOD', 'PI', 'POWER', 'RAND', 'ROUND', 'SIGN', 'SIN', 'SINH', 'SQRT',
        'SUM', 'TAN', 'TANH', 'TRUNC',
        # Other
        'CAST', 'IIF', 'CASE', 'DECODE', 'COALESCE', 'NULLIF')
    #: Table with exactly one row
    dual_table: ClassVar[str] = 'RDB$DATABASE'
    #: Column aliases could be used in SELECT
    supports_alias_in_select: ClassVar[bool] = True
    def is_keyword(self, ident: str) -> bool:
        """Returns True if `ident` is a reserved word."""
        return ident.upper() in RESERVED_WORDS
    def valid_identifier_part(self, char: str, quoted: bool=False) -> bool:
        """Returns True if character could be part of an identifier.

        Arguments:
            char:   Character to check.
            quoted: True if identifier is enclosed in double quotes.
        """
        if quoted:
            return char != '"'
        return char.isalnum() or char in '_$'
    def quote(self, ident: str, always: bool=False) -> str:
        """Returns identifier quoted if necessary (or always, when `always` is True)."""
        return quote_identifier(ident, always)
    def stored_procedure_call(self, name: str) -> str:
        """Returns initial clause of statement that calls selectable stored procedure."""
        return f'select * from {self.quote(name)}'
