"""Markdown rendering of search results for tool output."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troubledocs.models.content import ContentRecord
    from troubledocs.models.tools import SearchDocsOutput

NO_RESULTS_MESSAGE = "No troubleshooting documentation found matching your query."
RESULT_SEPARATOR = "\n\n---\n\n"


def format_content(record: ContentRecord) -> str:
    lines = [
        f"# {record.title}",
        "",
        f"**Service:** {record.service.upper()}",
        f"**Provider:** {record.provider.value.upper()}",
        f"**Category:** {record.category.value}",
        f"**Guide Type:** {record.guide_type.value}",
        f"**URL:** {record.url}",
        "",
        f"**Description:** {record.description}",
        "",
        f"**Keywords:** {', '.join(record.keywords)}",
    ]

    if record.sections:
        lines += ["", "**Key Sections:**"]
        lines += [f"- {s.heading} (Level {s.level})" for s in record.sections]

    if record.troubleshooting_steps:
        lines += ["", "**Troubleshooting Steps:**"]
        lines += [f"{s.step}. {s.title}" for s in record.troubleshooting_steps]

    if record.code_examples:
        lines += ["", f"**Code Examples:** {len(record.code_examples)} example(s) available"]

    lines += ["", f"**Last Updated:** {record.last_updated.isoformat()}"]
    return "\n".join(lines)


def format_search_output(output: SearchDocsOutput) -> str:
    if output.error:
        return f"Error: {output.error}"
    if not output.results:
        return NO_RESULTS_MESSAGE

    header = f"Found {output.total_results} result(s) in {output.search_time_ms} ms"
    return header + RESULT_SEPARATOR + RESULT_SEPARATOR.join(
        format_content(record) for record in output.results
    )
