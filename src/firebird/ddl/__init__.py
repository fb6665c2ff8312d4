# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/__init__.py
# DESCRIPTION:    Reconstruction of DDL for Firebird database objects
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

"""firebird-ddl - Firebird dialect, metadata model and DDL reconstruction.
"""

from .context import CatalogSession, ConnectionContext
from .dialect import FirebirdDialect
from .metamodel import FirebirdMetaModel
from .model import (Dependency, Function, FunctionArgument, Package, PackageEntry, Procedure,
                    ProcedureParameter, Sequence, Trigger, View, ViewColumn)
from .progress import CancellableMonitor, NullProgressMonitor, ProgressMonitor
from .provider import CatalogSourceReader, DDLProvider, SourceKind, SourceReader
from .types import CatalogError, ServerVersion, UnsupportedFeatureError, catalog_type

__VERSION__ = '0.1.0'
