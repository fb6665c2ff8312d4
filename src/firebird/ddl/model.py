# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/model.py
# DESCRIPTION:    Descriptors of Firebird database objects
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

"""firebird.ddl.model - Descriptors of Firebird database objects.

Each descriptor wraps one row fetched from an `RDB$` system table (a dictionary
keyed by column names) plus child collections. Descriptors are created by
`.CatalogReader` and are not changed afterwards. Fixed-width name columns are
stripped of trailing spaces on construction.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from firebird.base.collections import DataList

from . import formatter
from .types import (DataKind, ObjectType, ParameterKind, RoutineType, catalog_type, data_kind,
                    decode_trigger_type, is_db_event)

if TYPE_CHECKING:
    from .context import ConnectionContext

class MetaField:
    """Value from `RDB$TYPES` table.

    Arguments:
        attributes: Row from `RDB$TYPES`.
    """
    def __init__(self, attributes: dict[str, Any]):
        self._attributes: dict[str, Any] = attributes
        for attr in ('RDB$FIELD_NAME', 'RDB$TYPE_NAME'):
            if self._attributes.get(attr):
                self._attributes[attr] = self._attributes[attr].strip()
    def __repr__(self):
        return f"MetaField('{self.field_name}', {self.type}, '{self.type_name}')"
    @property
    def field_name(self) -> str:
        """Name of the column the value belongs to (`RDB$FIELD_NAME`)."""
        return self._attributes['RDB$FIELD_NAME']
    @property
    def type(self) -> int:
        """Value code (`RDB$TYPE`)."""
        return self._attributes['RDB$TYPE']
    @property
    def type_name(self) -> str:
        """Value name (`RDB$TYPE_NAME`)."""
        return self._attributes['RDB$TYPE_NAME']
    @property
    def system_flag(self) -> int:
        """`RDB$SYSTEM_FLAG`"""
        return self._attributes.get('RDB$SYSTEM_FLAG') or 0

class CatalogItem:
    """Base class for all database object descriptors.

    Arguments:
        context:    Connection context the object was loaded from.
        attributes: Row fetched from `RDB$` system table.
    """
    #: Name of the attribute that holds object name
    _name_attr: str = ''
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any]):
        #: Weak reference proxy to the `.ConnectionContext`
        self.context: ConnectionContext = context if isinstance(context, weakref.ProxyType) \
            else weakref.proxy(context)
        self._attributes: dict[str, Any] = attributes
        self._strip_attribute(self._name_attr)
    def __repr__(self):
        return f"{self.__class__.__name__}('{self.name}')"
    def _strip_attribute(self, attr: str) -> None:
        if self._attributes.get(attr):
            self._attributes[attr] = self._attributes[attr].strip()
    def is_sys_object(self) -> bool:
        """Returns True if this is a system object (`RDB$SYSTEM_FLAG` > 0)."""
        return (self._attributes.get('RDB$SYSTEM_FLAG') or 0) > 0
    def get_quoted_name(self) -> str:
        """Returns object name, quoted when necessary."""
        return self.context.quote(self.name)
    @property
    def name(self) -> str | None:
        """Object name."""
        return self._attributes.get(self._name_attr)
    @property
    def description(self) -> str | None:
        """Object description (`RDB$DESCRIPTION`), or `None`."""
        return self._attributes.get('RDB$DESCRIPTION')

class RoutineParameter(CatalogItem):
    """Base class for parameters of stored procedures and functions.

    Type information comes from `RDB$FIELDS` row joined to the parameter row.
    """
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any]):
        super().__init__(context, attributes)
        self._strip_attribute('RDB$RELATION_NAME')
        self._strip_attribute('RDB$FIELD_NAME')
    def get_sql_definition(self) -> str:
        """Returns SQL type definition of the parameter.

        Parameters declared as `TYPE OF COLUMN` return that clause. String types
        include maximum length, `NUMERIC` and `DECIMAL` include precision and scale
        when precision is known.
        """
        if (column := self.column) is not None:
            return f'TYPE OF COLUMN {self.context.quote(column[0])}.{self.context.quote(column[1])}'
        type_name = self.type_name
        if self.data_kind is DataKind.STRING and self.max_length:
            return f'{type_name}({self.max_length})'
        if type_name in ('NUMERIC', 'DECIMAL') and self.precision:
            return f'{type_name}({self.precision}, {-self.scale})'
        return type_name
    @property
    def kind(self) -> ParameterKind:
        """Parameter direction."""
        raise NotImplementedError
    @property
    def position(self) -> int:
        """Parameter position."""
        raise NotImplementedError
    @property
    def field_type(self) -> int | None:
        """`RDB$FIELD_TYPE` code."""
        return self._attributes.get('RDB$FIELD_TYPE')
    @property
    def sub_type(self) -> int | None:
        """`RDB$FIELD_SUB_TYPE` code."""
        return self._attributes.get('RDB$FIELD_SUB_TYPE')
    @property
    def scale(self) -> int:
        """`RDB$FIELD_SCALE`"""
        return self._attributes.get('RDB$FIELD_SCALE') or 0
    @property
    def precision(self) -> int | None:
        """`RDB$FIELD_PRECISION` for exact numeric types, or `None`."""
        return self._attributes.get('RDB$FIELD_PRECISION')
    @property
    def type_name(self) -> str:
        """SQL type name.

        Codes not known to `.catalog_type()` are looked up in `RDB$TYPES` cache.
        """
        result = catalog_type(self.field_type, self.sub_type, self.scale)
        if result == 'UNKNOWN' and self.field_type is not None:
            result = self.context.get_meta_field_value('RDB$FIELD_TYPE', self.field_type) or result
        return result
    @property
    def data_kind(self) -> DataKind:
        """Broad category of parameter type."""
        return data_kind(self.field_type)
    @property
    def max_length(self) -> int | None:
        """Maximum length in characters (`RDB$CHARACTER_LENGTH`), or in bytes
        (`RDB$FIELD_LENGTH`) when character length is not defined.
        """
        result = self._attributes.get('RDB$CHARACTER_LENGTH')
        return self._attributes.get('RDB$FIELD_LENGTH') if result is None else result
    @property
    def column(self) -> tuple[str, str] | None:
        """Table and column for parameters declared as `TYPE OF COLUMN`, or `None`."""
        relation = self._attributes.get('RDB$RELATION_NAME')
        field = self._attributes.get('RDB$FIELD_NAME')
        if relation and field:
            return (relation, field)
        return None

class ProcedureParameter(RoutineParameter):
    """Parameter of stored procedure (`RDB$PROCEDURE_PARAMETERS`).
    """
    _name_attr = 'RDB$PARAMETER_NAME'
    @property
    def kind(self) -> ParameterKind:
        return ParameterKind.IN if self._attributes['RDB$PARAMETER_TYPE'] == 0 else ParameterKind.OUT
    @property
    def position(self) -> int:
        return self._attributes['RDB$PARAMETER_NUMBER']

class FunctionArgument(RoutineParameter):
    """Argument of stored function (`RDB$FUNCTION_ARGUMENTS`).

    Argument at position 0 is the function return value.
    """
    _name_attr = 'RDB$ARGUMENT_NAME'
    @property
    def kind(self) -> ParameterKind:
        return ParameterKind.RETURN if self.position == 0 else ParameterKind.IN
    @property
    def position(self) -> int:
        return self._attributes['RDB$ARGUMENT_POSITION']

class Procedure(CatalogItem):
    """Stored procedure (`RDB$PROCEDURES`).

    Arguments:
        context:    Connection context.
        attributes: Row from `RDB$PROCEDURES`.
        parameters: Procedure parameters in catalog order.
    """
    _name_attr = 'RDB$PROCEDURE_NAME'
    _source_attr = 'RDB$PROCEDURE_SOURCE'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any],
                 parameters: Iterable[RoutineParameter]=()):
        super().__init__(context, attributes)
        self._strip_attribute('RDB$PACKAGE_NAME')
        self.__params: DataList[RoutineParameter] = DataList(parameters, RoutineParameter,
                                                             'item.name', frozen=True)
    def _filter_params(self, *kinds: ParameterKind) -> DataList[RoutineParameter]:
        result = self.__params.extract(lambda p: p.kind in kinds, copy=True)
        result.freeze()
        return result
    @property
    def routine_type(self) -> RoutineType:
        """Kind of routine."""
        return RoutineType.PROCEDURE
    @property
    def parameters(self) -> DataList[RoutineParameter]:
        """All parameters in catalog order."""
        return self.__params
    @property
    def input_params(self) -> DataList[RoutineParameter]:
        """Input parameters."""
        return self._filter_params(ParameterKind.IN)
    @property
    def output_params(self) -> DataList[RoutineParameter]:
        """Output parameters (including function return value)."""
        return self._filter_params(ParameterKind.OUT, ParameterKind.RETURN)
    @property
    def source(self) -> str | None:
        """PSQL source code, or `None`."""
        return self._attributes.get(self._source_attr)
    @property
    def package_name(self) -> str | None:
        """Name of package the routine belongs to, or `None` for standalone routines."""
        return self._attributes.get('RDB$PACKAGE_NAME')

class Function(Procedure):
    """Stored PSQL function (`RDB$FUNCTIONS`).

    The `definition` (complete `CREATE OR ALTER FUNCTION` statement) is built
    when the descriptor is created.
    """
    _name_attr = 'RDB$FUNCTION_NAME'
    _source_attr = 'RDB$FUNCTION_SOURCE'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any],
                 parameters: Iterable[FunctionArgument]=()):
        super().__init__(context, attributes, parameters)
        self.__definition: str = formatter.function_ddl(self, self.source)
    @property
    def routine_type(self) -> RoutineType:
        return RoutineType.FUNCTION
    @property
    def returns(self) -> FunctionArgument | None:
        """Return argument, or `None`."""
        return self.parameters.find(lambda p: p.kind is ParameterKind.RETURN)
    @property
    def deterministic(self) -> bool:
        """True if function is declared as `DETERMINISTIC`."""
        return bool(self._attributes.get('RDB$DETERMINISTIC_FLAG'))
    @property
    def definition(self) -> str:
        """Complete `CREATE OR ALTER FUNCTION` statement."""
        return self.__definition

class PackageEntry:
    """Synthetic routine-like entry of a `Package` that carries reconstructed DDL
    of package header or body.
    """
    def __init__(self, package: Package, name: str, source: str):
        #: Package the entry belongs to
        self.package: Package = package
        #: Entry name (`HEADER` or `BODY`)
        self.name: str = name
        #: Reconstructed DDL
        self.source: str = source
    def __repr__(self):
        return f"PackageEntry('{self.package.name}', '{self.name}')"
    @property
    def routine_type(self) -> RoutineType:
        """Kind of routine."""
        return RoutineType.UNKNOWN

class Package(CatalogItem):
    """Stored package (`RDB$PACKAGES`).

    The package has exactly two entries, `HEADER` and `BODY`, each carrying the
    reconstructed DDL of that part.
    """
    _name_attr = 'RDB$PACKAGE_NAME'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any]):
        super().__init__(context, attributes)
        header, body = formatter.package_ddl(self)
        self.__entries: DataList[PackageEntry] = DataList([PackageEntry(self, 'HEADER', header),
                                                           PackageEntry(self, 'BODY', body)],
                                                          PackageEntry, 'item.name', frozen=True)
    @property
    def header(self) -> str | None:
        """Source of package header (`RDB$PACKAGE_HEADER_SOURCE`)."""
        return self._attributes.get('RDB$PACKAGE_HEADER_SOURCE')
    @property
    def body(self) -> str | None:
        """Source of package body (`RDB$PACKAGE_BODY_SOURCE`)."""
        return self._attributes.get('RDB$PACKAGE_BODY_SOURCE')
    @property
    def valid_body(self) -> bool | None:
        """True if package body is valid, `None` if unknown."""
        result = self._attributes.get('RDB$VALID_BODY_FLAG')
        return bool(result) if result is not None else None
    @property
    def entries(self) -> DataList[PackageEntry]:
        """`HEADER` and `BODY` entries."""
        return self.__entries

class Trigger(CatalogItem):
    """Trigger (`RDB$TRIGGERS`).
    """
    _name_attr = 'RDB$TRIGGER_NAME'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any]):
        super().__init__(context, attributes)
        self._strip_attribute('RDB$RELATION_NAME')
    def is_db_trigger(self) -> bool:
        """Returns True for database event and DDL triggers (not bound to a table)."""
        return is_db_event(self.trigger_type)
    def get_type_as_string(self) -> str:
        """Returns trigger event clause, e.g. "AFTER INSERT OR UPDATE" or "ON CONNECT"."""
        return decode_trigger_type(self.trigger_type)
    @property
    def relation_name(self) -> str | None:
        """Name of table or view the trigger belongs to, or `None`."""
        return self._attributes.get('RDB$RELATION_NAME')
    @property
    def trigger_type(self) -> int:
        """`RDB$TRIGGER_TYPE` code."""
        return self._attributes['RDB$TRIGGER_TYPE']
    @property
    def sequence(self) -> int:
        """Execution position."""
        return self._attributes.get('RDB$TRIGGER_SEQUENCE') or 0
    @property
    def active(self) -> bool:
        """True if trigger is active."""
        return not self._attributes.get('RDB$TRIGGER_INACTIVE')
    @property
    def source(self) -> str | None:
        """PSQL source code, or `None`."""
        return self._attributes.get('RDB$TRIGGER_SOURCE')

class ViewColumn(CatalogItem):
    """Column of a view (`RDB$RELATION_FIELDS`)."""
    _name_attr = 'RDB$FIELD_NAME'
    @property
    def position(self) -> int:
        """Column position."""
        return self._attributes.get('RDB$FIELD_POSITION') or 0

class View(CatalogItem):
    """View (`RDB$RELATIONS` with view BLR).

    Arguments:
        context:    Connection context.
        attributes: Row from `RDB$RELATIONS`.
        columns:    View columns ordered by position.
    """
    _name_attr = 'RDB$RELATION_NAME'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any],
                 columns: Iterable[ViewColumn]=()):
        super().__init__(context, attributes)
        self.__columns: DataList[ViewColumn] = DataList(columns, ViewColumn, 'item.name',
                                                        frozen=True)
    @property
    def columns(self) -> DataList[ViewColumn]:
        """View columns."""
        return self.__columns
    @property
    def source(self) -> str | None:
        """SELECT statement that defines the view (`RDB$VIEW_SOURCE`)."""
        return self._attributes.get('RDB$VIEW_SOURCE')

class Sequence(CatalogItem):
    """Sequence or generator (`RDB$GENERATORS`)."""
    _name_attr = 'RDB$GENERATOR_NAME'
    def is_identity(self) -> bool:
        """Returns True if sequence was created for IDENTITY column."""
        return self._attributes.get('RDB$SYSTEM_FLAG') == 6
    @property
    def id(self) -> int | None:
        """`RDB$GENERATOR_ID`"""
        return self._attributes.get('RDB$GENERATOR_ID')
    @property
    def initial_value(self) -> int | None:
        """Initial value (Firebird 4+), or `None`."""
        return self._attributes.get('RDB$INITIAL_VALUE')
    @property
    def increment(self) -> int | None:
        """Increment (Firebird 3+), or `None`."""
        return self._attributes.get('RDB$GENERATOR_INCREMENT')

class Dependency(CatalogItem):
    """Dependency between database objects (`RDB$DEPENDENCIES`).

    The descriptor name is the name of the dependent object.
    """
    _name_attr = 'RDB$DEPENDENT_NAME'
    def __init__(self, context: ConnectionContext, attributes: dict[str, Any]):
        super().__init__(context, attributes)
        self._strip_attribute('RDB$DEPENDED_ON_NAME')
        self._strip_attribute('RDB$FIELD_NAME')
        self._strip_attribute('RDB$PACKAGE_NAME')
    def _type_name(self, code: int | None) -> str:
        if code in ObjectType._value2member_map_:
            return ObjectType(code).name
        if code is not None and (name := self.context.get_meta_field_value('RDB$OBJECT_TYPE', code)):
            return name
        return 'UNKNOWN'
    @property
    def dependent_name(self) -> str:
        """Name of dependent object."""
        return self.name
    @property
    def dependent_type(self) -> int:
        """Type code of dependent object."""
        return self._attributes['RDB$DEPENDENT_TYPE']
    @property
    def dependent_type_name(self) -> str:
        """Type name of dependent object."""
        return self._type_name(self.dependent_type)
    @property
    def depended_on_name(self) -> str:
        """Name of object the dependent object depends on."""
        return self._attributes['RDB$DEPENDED_ON_NAME']
    @property
    def depended_on_type(self) -> int:
        """Type code of depended-on object."""
        return self._attributes['RDB$DEPENDED_ON_TYPE']
    @property
    def depended_on_type_name(self) -> str:
        """Type name of depended-on object."""
        return self._type_name(self.depended_on_type)
    @property
    def field_name(self) -> str | None:
        """Column of depended-on object, or `None`."""
        return self._attributes.get('RDB$FIELD_NAME')
    @property
    def package_name(self) -> str | None:
        """Package of dependent object, or `None`."""
        return self._attributes.get('RDB$PACKAGE_NAME')
