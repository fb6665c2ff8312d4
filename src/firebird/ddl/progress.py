# SPDX-FileCopyrightText: 2020-present The Firebird Projects <www.firebirdsql.org>
#
# SPDX-License-Identifier: MIT
#
# PROGRAM/MODULE: firebird-ddl
# FILE:           firebird/ddl/progress.py
# DESCRIPTION:    Progress monitoring and cancellation
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

"""firebird.ddl.progress - Progress monitor protocol.

Long catalog scans poll `ProgressMonitor.is_canceled()` once per row and stop
early (without error) when cancellation was requested.
"""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)

class ProgressMonitor:
    """Base class for progress monitors.

    The default implementation never cancels and ignores task names.
    """
    def is_canceled(self) -> bool:
        """Returns True if running operation should stop."""
        return False
    def sub_task(self, name: str) -> None:
        """Called when a new step of operation begins."""

class NullProgressMonitor(ProgressMonitor):
    """Progress monitor that does nothing."""

class CancellableMonitor(ProgressMonitor):
    """Progress monitor that could be canceled with `cancel()`.

    Arguments:
        cancel_after: When set, the monitor cancels itself after this number of
                      `is_canceled()` calls returned False.
    """
    def __init__(self, cancel_after: int | None=None):
        self._canceled: bool = False
        self._countdown: int | None = cancel_after
        #: Names of tasks reported via `sub_task()`
        self.tasks: list[str] = []
    def cancel(self) -> None:
        """Requests cancellation."""
        self._canceled = True
    def is_canceled(self) -> bool:
        if not self._canceled and self._countdown is not None:
            if self._countdown <= 0:
                self._canceled = True
            self._countdown -= 1
        return self._canceled
    def sub_task(self, name: str) -> None:
        log.debug("Task: %s", name)
        self.tasks.append(name)
