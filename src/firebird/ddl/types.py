# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/types.py
# DESCRIPTION:    Types, enums and errors used by firebird-ddl
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

"""firebird.ddl.types - Types, enums and errors for Firebird DDL reconstruction.

This module holds the pieces shared by all other `firebird.ddl` modules:

*   Enums for the codes stored in `RDB$` system tables (`FieldType`,
    `ObjectType`, trigger type codes).
*   `ServerVersion` parsed from the server product version string.
*   `catalog_type()` that maps catalog type codes to SQL type names.
*   `decode_trigger_type()` that renders `RDB$TRIGGER_TYPE` as SQL text.
*   Exceptions raised by the catalog reader and source readers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag, auto
from typing import NamedTuple, Self

from firebird.base.types import Error


class CatalogError(Error):
    """Exception raised when a query against the `RDB$` catalog tables fails.

    The underlying driver error is always chained as `__cause__`.
    """

class UnsupportedFeatureError(Error):
    """Exception raised when the connected server cannot provide requested metadata
    (for example, source of PSQL functions on servers older than 3.0).
    """

class FieldType(IntEnum):
    """Firebird field type codes (`RDB$FIELD_TYPE`).
    """
    NONE = 0
    SHORT = 7
    LONG = 8
    QUAD = 9
    FLOAT = 10
    DATE = 12
    TIME = 13
    TEXT = 14
    INT64 = 16
    BOOLEAN = 23
    DEC16 = 24
    DEC34 = 25
    INT128 = 26
    DOUBLE = 27
    TIME_TZ = 28
    TIMESTAMP_TZ = 29
    TIME_TZ_EX = 30
    TIMESTAMP_TZ_EX = 31
    TIMESTAMP = 35
    VARYING = 37
    CSTRING = 40
    BLOB_ID = 45
    BLOB = 261

class FieldSubType(IntEnum):
    """Sub-types of integral fields (`RDB$FIELD_SUB_TYPE`)."""
    NONE = 0
    NUMERIC = 1
    DECIMAL = 2

class ObjectType(IntEnum):
    """Object type codes used in `RDB$DEPENDENCIES`."""
    TABLE = 0
    VIEW = 1
    TRIGGER = 2
    DOMAIN = 3
    CHECK = 4
    PROCEDURE = 5
    INDEX_EXPR = 6
    EXCEPTION = 7
    USER = 8
    COLUMN = 9
    INDEX = 10
    CHARACTER_SET = 11
    USER_GROUP = 12
    ROLE = 13
    GENERATOR = 14
    UDF = 15
    BLOB_FILTER = 16
    COLLATION = 17
    PACKAGE_HEADER = 18
    PACKAGE_BODY = 19

class ParameterKind(Enum):
    """Direction of routine parameter."""
    IN = 'IN'
    OUT = 'OUT'
    RETURN = 'RETURN'

class DataKind(Enum):
    """Broad category of parameter data type."""
    STRING = 'STRING'
    NUMERIC = 'NUMERIC'
    DATETIME = 'DATETIME'
    BOOLEAN = 'BOOLEAN'
    LOB = 'LOB'
    UNKNOWN = 'UNKNOWN'

class RoutineType(Enum):
    """Kind of stored routine."""
    PROCEDURE = 'PROCEDURE'
    FUNCTION = 'FUNCTION'
    UNKNOWN = 'UNKNOWN'

class RoutineLoading(Enum):
    """Strategy used to rebuild function definitions while loading them.
    """
    #: Definition is rebuilt for each row while the function list is read.
    IMMEDIATE = 'IMMEDIATE'
    #: All rows are read first, definitions are rebuilt afterwards.
    BATCH = 'BATCH'

class TriggerType(IntEnum):
    """Trigger type codes."""
    DML = 0
    DB = 8192
    DDL = 16384

class DBTrigger(IntEnum):
    """Database trigger type codes."""
    CONNECT = 0
    DISCONNECT = 1
    TRANSACTION_START = 2
    TRANSACTION_COMMIT = 3
    TRANSACTION_ROLLBACK = 4

class DMLTrigger(IntFlag):
    """DML trigger type codes."""
    INSERT = auto()
    UPDATE = auto()
    DELETE = auto()

class TriggerTime(IntEnum):
    """Trigger action time codes."""
    BEFORE = 0
    AFTER = 1

class DDLTrigger(IntEnum):
    """DDL trigger event codes."""
    CREATE_TABLE = 1
    ALTER_TABLE = 2
    DROP_TABLE = 3
    CREATE_PROCEDURE = 4
    ALTER_PROCEDURE = 5
    DROP_PROCEDURE = 6
    CREATE_FUNCTION = 7
    ALTER_FUNCTION = 8
    DROP_FUNCTION = 9
    CREATE_TRIGGER = 10
    ALTER_TRIGGER = 11
    DROP_TRIGGER = 12
    CREATE_EXCEPTION = 16
    ALTER_EXCEPTION = 17
    DROP_EXCEPTION = 18
    CREATE_VIEW = 19
    ALTER_VIEW = 20
    DROP_VIEW = 21
    CREATE_DOMAIN = 22
    ALTER_DOMAIN = 23
    DROP_DOMAIN = 24
    CREATE_ROLE = 25
    ALTER_ROLE = 26
    DROP_ROLE = 27
    CREATE_INDEX = 28
    ALTER_INDEX = 29
    DROP_INDEX = 30
    CREATE_SEQUENCE = 31
    ALTER_SEQUENCE = 32
    DROP_SEQUENCE = 33
    CREATE_USER = 34
    ALTER_USER = 35
    DROP_USER = 36
    CREATE_COLLATION = 37
    DROP_COLLATION = 38
    ALTER_CHARACTER_SET = 39
    CREATE_PACKAGE = 40
    ALTER_PACKAGE = 41
    DROP_PACKAGE = 42
    CREATE_PACKAGE_BODY = 43
    DROP_PACKAGE_BODY = 44
    CREATE_MAPPING = 45
    ALTER_MAPPING = 46
    DROP_MAPPING = 47

#: Event bits of trigger fired by any DDL statement
DDL_ANY_EVENTS = 0x7FFFFFFFFFFFFFFF & ~(TriggerType.DDL | TriggerType.DB | 1)

class ErrorPosition(NamedTuple):
    """Zero-based position of an error inside SQL text."""
    line: int
    position: int

#: Regular expression for Firebird product version string, e.g. `WI-V3.0.5.33220 Firebird 3.0`
VERSION_PATTERN = re.compile(r'.+-V([0-9]+\.[0-9]+\.[0-9]+).+')

@dataclass(frozen=True, order=True)
class ServerVersion:
    """Firebird server version (major, minor, patch).

    Instances are ordered, so they could be compared directly::

        if context.version >= ServerVersion(2, 5, 0):
            ...
    """
    #: Major version number
    major: int = 0
    #: Minor version number
    minor: int = 0
    #: Patch (release) number
    patch: int = 0
    @classmethod
    def parse(cls, text: str | None) -> Self:
        """Returns version parsed from Firebird product version string.

        Arguments:
            text: Version string as reported by server, e.g. `WI-V3.0.5.33220 Firebird 3.0`.

        Returns:
            Parsed version, or `0.0.0` when `text` is empty or does not match the
            expected format.
        """
        if text and (match := VERSION_PATTERN.fullmatch(text)):
            return cls(*(int(part) for part in match.group(1).split('.')))
        return cls()
    def __str__(self):
        return f'{self.major}.{self.minor}.{self.patch}'
    @property
    def short(self) -> str:
        """Version as `major.minor` string."""
        return f'{self.major}.{self.minor}'

_SIMPLE_TYPES: dict[int, str] = {FieldType.SHORT: 'SMALLINT', FieldType.LONG: 'INTEGER',
                                 FieldType.QUAD: 'QUAD', FieldType.FLOAT: 'FLOAT',
                                 FieldType.DATE: 'DATE', FieldType.TIME: 'TIME',
                                 FieldType.TEXT: 'CHAR', FieldType.INT64: 'BIGINT',
                                 FieldType.BOOLEAN: 'BOOLEAN',
                                 FieldType.DEC16: 'DECFLOAT(16)',
                                 FieldType.DEC34: 'DECFLOAT(34)',
                                 FieldType.INT128: 'INT128',
                                 FieldType.DOUBLE: 'DOUBLE PRECISION',
                                 FieldType.TIME_TZ: 'TIME WITH TIME ZONE',
                                 FieldType.TIMESTAMP_TZ: 'TIMESTAMP WITH TIME ZONE',
                                 FieldType.TIME_TZ_EX: 'TIME WITH TIME ZONE',
                                 FieldType.TIMESTAMP_TZ_EX: 'TIMESTAMP WITH TIME ZONE',
                                 FieldType.TIMESTAMP: 'TIMESTAMP',
                                 FieldType.VARYING: 'VARCHAR',
                                 FieldType.CSTRING: 'CSTRING',
                                 FieldType.BLOB_ID: 'BLOB_ID', FieldType.BLOB: 'BLOB'}
_INTEGRAL_TYPES = (FieldType.SHORT, FieldType.LONG, FieldType.INT64, FieldType.INT128)
_INTEGRAL_SUBTYPES: dict[int, str] = {FieldSubType.NUMERIC: 'NUMERIC',
                                      FieldSubType.DECIMAL: 'DECIMAL'}
_DATA_KINDS: dict[int, DataKind] = {FieldType.TEXT: DataKind.STRING,
                                    FieldType.VARYING: DataKind.STRING,
                                    FieldType.CSTRING: DataKind.STRING,
                                    FieldType.BOOLEAN: DataKind.BOOLEAN,
                                    FieldType.BLOB: DataKind.LOB,
                                    FieldType.BLOB_ID: DataKind.LOB,
                                    FieldType.DATE: DataKind.DATETIME,
                                    FieldType.TIME: DataKind.DATETIME,
                                    FieldType.TIME_TZ: DataKind.DATETIME,
                                    FieldType.TIMESTAMP_TZ: DataKind.DATETIME,
                                    FieldType.TIME_TZ_EX: DataKind.DATETIME,
                                    FieldType.TIMESTAMP_TZ_EX: DataKind.DATETIME,
                                    FieldType.TIMESTAMP: DataKind.DATETIME}

def catalog_type(field_type: int | None, sub_type: int | None=None, scale: int | None=0) -> str:
    """Returns SQL type name for catalog field type code.

    Arguments:
        field_type: Value of `RDB$FIELD_TYPE`.
        sub_type:   Value of `RDB$FIELD_SUB_TYPE`.
        scale:      Value of `RDB$FIELD_SCALE`.

    Integral types with `NUMERIC` or `DECIMAL` sub-type are reported under the sub-type
    name, and `DOUBLE PRECISION` with non-zero scale is reported as `NUMERIC`.
    Unknown codes are reported as `UNKNOWN`.
    """
    if field_type in _INTEGRAL_TYPES and sub_type in _INTEGRAL_SUBTYPES:
        return _INTEGRAL_SUBTYPES[sub_type]
    if field_type == FieldType.DOUBLE and scale:
        return 'NUMERIC'
    return _SIMPLE_TYPES.get(field_type, 'UNKNOWN')

def data_kind(field_type: int | None) -> DataKind:
    """Returns `DataKind` for catalog field type code."""
    if field_type in _DATA_KINDS:
        return _DATA_KINDS[field_type]
    return DataKind.NUMERIC if field_type in _SIMPLE_TYPES else DataKind.UNKNOWN

def _trigger_category(code: int) -> TriggerType:
    if code & TriggerType.DDL:
        return TriggerType.DDL
    if code & TriggerType.DB:
        return TriggerType.DB
    return TriggerType.DML

def _action_type(code: int, slot: int) -> DMLTrigger | None:
    if (value := ((code + 1) >> (slot * 2 - 1)) & 3) > 0:
        return list(DMLTrigger)[value - 1]
    return None

def _ru(value: IntEnum) -> str:
    return value.name.replace('_', ' ')

def is_db_event(code: int) -> bool:
    """Returns True if `RDB$TRIGGER_TYPE` code is not bound to a table (database
    event or DDL trigger).
    """
    return _trigger_category(code) is not TriggerType.DML

def decode_trigger_type(code: int) -> str:
    """Returns `RDB$TRIGGER_TYPE` code rendered as SQL event clause.

    Examples: "AFTER INSERT OR UPDATE", "ON CONNECT", "BEFORE ANY DDL STATEMENT".
    """
    category = _trigger_category(code)
    if category is TriggerType.DB:
        return 'ON ' + _ru(DBTrigger(code & ~TriggerType.DB))
    if category is TriggerType.DDL:
        # Each event is one bit, the bit number is the event code
        events = code & ~(TriggerType.DDL | TriggerType.DB | 1)
        words = [TriggerTime(code & 1).name]
        if events == DDL_ANY_EVENTS:
            words.append('ANY DDL STATEMENT')
        else:
            words.append(' OR '.join(_ru(event) for event in DDLTrigger if events & (1 << event)))
        return ' '.join(words)
    words = [TriggerTime((code + 1) & 1).name]
    for slot in range(1, 4):
        if (action := _action_type(code, slot)) is not None:
            if slot > 1:
                words.append('OR')
            words.append(action.name)
    return ' '.join(words)
