# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Report rendering exports."""

from .commands import render_delete_examples, render_manual_commands
from .printer import ResultPrinter, format_body

__all__ = ["ResultPrinter", "format_body", "render_delete_examples", "render_manual_commands"]
