"""
LeapJoin Result Renderer
========================
Formats join results and benchmark summaries for the console.

Features:
  - Streaming: prints rows as they arrive (no full materialization)
  - Auto-column-width from a sample of the first rows (callers bound
    row counts with LimitExec)
  - Modes: table, raw
  - Summary line with elapsed time, optional stats block
  - Classified error messages
"""

import sys
from typing import Any, Dict, Iterator, List, Optional, TextIO

MODES = ("table", "raw")


class Renderer:
    """
    Streaming result renderer with configurable display modes.
    """

    def __init__(self, output: TextIO = None, errors: TextIO = None):
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr
        self.mode: str = "table"        # table, raw
        self.show_headers: bool = True

    # ─── Public API ─────────────────────────────────────────────────

    def render_rows(self, rows: Iterator, column_names: Optional[List[str]] = None) -> int:
        """
        Render result rows. Streams rows from iterator.
        Returns number of rows rendered.
        """
        if self.mode == "raw":
            return self._render_raw(rows, column_names)
        return self._render_table(rows, column_names)

    def render_summary(self, count: int, elapsed: float):
        """The one-line benchmark result."""
        self._print(f"found {count} triangles in {self._format_elapsed(elapsed)}")

    def render_stats(self, stats: Dict[str, Any]):
        width = max((len(k) for k in stats), default=0)
        for key, value in stats.items():
            self._print(f"  {key:>{width}}: {self._format_value(value)}")

    def render_error(self, error: Exception):
        """Render an error with classification prefix to the error stream."""
        error_type = type(error).__name__
        prefix = self._classify_error(error_type)
        print(f"{prefix}: {error}", file=self.errors)

    # ─── Table Mode (streaming with width sampling) ─────────────────

    def _render_table(self, rows: Iterator, column_names: Optional[List[str]]) -> int:
        """
        Render rows in aligned table format.
        Buffers first batch to determine column widths, then streams.
        """
        buffer = []
        sample_size = 100
        headers = list(column_names or [])
        rows = iter(rows)

        for row in rows:
            vals = self._extract_values(row)
            if not headers:
                headers = list(vals.keys())
            buffer.append(vals)
            if len(buffer) >= sample_size:
                break

        if not buffer and not headers:
            return 0

        widths = self._calculate_widths(headers, buffer)

        if self.show_headers:
            self._print_table_separator(widths, headers)
            self._print_table_row(widths, headers, {h: h for h in headers})
            self._print_table_separator(widths, headers)

        count = 0
        for vals in buffer:
            self._print_table_row(widths, headers, vals)
            count += 1

        # Stream remaining rows
        for row in rows:
            self._print_table_row(widths, headers, self._extract_values(row))
            count += 1

        if self.show_headers and count > 0:
            self._print_table_separator(widths, headers)

        return count

    def _calculate_widths(self, headers: List[str], rows: List[Dict]) -> Dict[str, int]:
        widths = {h: len(h) for h in headers}
        for row in rows:
            for h in headers:
                widths[h] = max(widths[h], len(self._format_value(row.get(h))))
        return widths

    def _print_table_separator(self, widths: Dict[str, int], headers: List[str]):
        """Print +----+------+ separator line."""
        parts = ["+"]
        for h in headers:
            parts.append("-" * (widths[h] + 2) + "+")
        self._print("".join(parts))

    def _print_table_row(self, widths: Dict[str, int], headers: List[str], vals: Dict):
        """Print | col1 | col2 | row."""
        parts = ["|"]
        for h in headers:
            raw_val = vals.get(h)
            val_str = self._format_value(raw_val)
            w = widths[h]
            # Right-align numbers, left-align strings
            if isinstance(raw_val, int):
                parts.append(f" {val_str:>{w}} |")
            else:
                parts.append(f" {val_str:<{w}} |")
        self._print("".join(parts))

    # ─── Raw Mode ───────────────────────────────────────────────────

    def _render_raw(self, rows: Iterator, column_names: Optional[List[str]]) -> int:
        """Render values separated by spaces, one triple per line."""
        count = 0
        headers = list(column_names or [])
        printed_headers = False

        for row in rows:
            vals = self._extract_values(row)
            if not headers:
                headers = list(vals.keys())
            if self.show_headers and not printed_headers:
                self._print(" ".join(headers))
                printed_headers = True
            self._print(" ".join(self._format_value(vals.get(h)) for h in headers))
            count += 1

        return count

    # ─── Helpers ────────────────────────────────────────────────────

    def _extract_values(self, row) -> Dict[str, Any]:
        """Extract values dict from an ExecutionRow, dict or (a, b, c) tuple."""
        if hasattr(row, 'values') and isinstance(row.values, dict):
            return row.values
        if isinstance(row, dict):
            return row
        if isinstance(row, tuple):
            return dict(zip("abc", row))
        raise TypeError(f"Cannot render row of type {type(row).__name__}")

    def _format_value(self, value) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, float):
            return f"{value:.6g}"
        return str(value)

    def _format_elapsed(self, seconds: float) -> str:
        if seconds < 1e-3:
            return f"{seconds * 1e6:.1f}µs"
        if seconds < 1.0:
            return f"{seconds * 1e3:.3f}ms"
        return f"{seconds:.3f}s"

    def _classify_error(self, error_type: str) -> str:
        """Map error class name to user-friendly prefix."""
        mapping = {
            "RelationError": "InputError",
            "TrieStateError": "InternalError",
            "ValueError": "Error",
            "RuntimeError": "ExecutionError",
            "KeyboardInterrupt": "Interrupted",
        }
        return mapping.get(error_type, f"Error[{error_type}]")

    def _print(self, text: str):
        """Print a line to the output stream."""
        print(text, file=self.output)
