"""Reporting sink: text, tables and DataFrames of tournament results."""

from .formatters import (
    format_result,
    format_results,
    format_failure,
    results_to_frame,
    score_matrix_frame,
    unique_labels,
    build_results_table,
)

__all__ = [
    "format_result",
    "format_results",
    "format_failure",
    "results_to_frame",
    "score_matrix_frame",
    "unique_labels",
    "build_results_table",
]
