# -------------------------------------------------------------------------------------------------
#  Copyright (C) 2015-2025 Nautech Systems Pty Ltd. All rights reserved.
#  https://nautechsystems.io
#
#  Licensed under the GNU Lesser General Public License Version 3.0 (the "License");
#  You may not use this file except in compliance with the License.
#  You may obtain a copy of the License at https://www.gnu.org/licenses/lgpl-3.0.en.html
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# -------------------------------------------------------------------------------------------------
"""
Plain-text reports shared by graph validation and eager materialization.
"""

from typing import Iterable, List, Optional, Sequence, Tuple


ReportEntry = Tuple[str, str, Optional[str]]


def format_report(
    title: str,
    summary: Sequence[str],
    sections: Iterable[Tuple[str, Sequence[ReportEntry]]] = (),
) -> str:
    """
    Render a titled report with per-component entries.

    Parameters
    ----------
    title : str
        Report heading, underlined
    summary : Sequence[str]
        Lines printed under the heading
    sections : Iterable[Tuple[str, Sequence[ReportEntry]]]
        ``(heading, entries)`` pairs, each entry a ``(component id, message, suggestion)``
        triple. Sections without entries are omitted.

    Returns
    -------
    str
    """
    lines: List[str] = [title, "=" * len(title), *summary]

    for heading, entries in sections:
        if not entries:
            continue
        lines.append("")
        lines.append(f"{heading}:")
        for component_id, message, suggestion in entries:
            lines.append(f"  - {component_id}: {message}")
            if suggestion:
                lines.append(f"    Suggestion: {suggestion}")

    return "\n".join(lines)
