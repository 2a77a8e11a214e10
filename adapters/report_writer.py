import logging
import os
from datetime import date, datetime
from typing import Callable, List, Optional

from application.batch_check_service import summarize
from domain.dates import format_reference_date
from domain.models import NOT_AVAILABLE, CheckStatus, ReportEntry

logger = logging.getLogger(__name__)


def render_report(
    entries: List[ReportEntry], reference_date: date, generated_at: datetime
) -> str:
    """Render the markdown report for a batch of checks."""
    reference = format_reference_date(reference_date)
    counts = summarize(entries)

    lines = [
        "# Informe de modificaciones de artículos legales",
        "",
        f"**Fecha de referencia:** {reference}",
        f"**Fecha del informe:** {generated_at.strftime('%d/%m/%Y %H:%M:%S')}",
        "",
        "## Resumen",
        "",
        f"- **Total de artículos verificados:** {len(entries)}",
        f"- **Artículos modificados desde {reference}:** {counts[CheckStatus.MODIFIED]}",
        f"- **Artículos no modificados:** {counts[CheckStatus.NOT_MODIFIED]}",
        f"- **Artículos no encontrados:** {counts[CheckStatus.NOT_FOUND]}",
        f"- **Artículos con error en la consulta:** {counts[CheckStatus.ERROR]}",
        "",
    ]

    modified = [e for e in entries if e.status == CheckStatus.MODIFIED]
    if modified:
        lines += ["## Artículos modificados", ""]
        for entry in modified:
            result = entry.result
            lines.append(f"### {entry.reference.original_line}")
            lines.append("")
            if entry.display_name:
                lines.append(f"- **Norma:** {entry.display_name}")
            lines.append(f"- **ID en el BOE:** {entry.document_id}")
            lines.append(
                f"- **Fecha última modificación:** "
                f"{result.last_modified_date or NOT_AVAILABLE}"
            )
            if result.modification_details:
                lines.append("- **Detalles de las modificaciones:**")
                for detail in result.modification_details:
                    lines.append(
                        f"  - {detail.date}: {detail.text} (Ref: {detail.reference_code})"
                    )
            lines.append("")

    not_found = [e for e in entries if e.status == CheckStatus.NOT_FOUND]
    if not_found:
        lines += ["## Artículos no encontrados", ""]
        for entry in not_found:
            location = entry.document_id or entry.result.message or NOT_AVAILABLE
            lines.append(f"- {entry.reference.original_line} ({location})")
        lines.append("")

    errored = [e for e in entries if e.status == CheckStatus.ERROR]
    if errored:
        lines += ["## Artículos con error en la consulta", ""]
        for entry in errored:
            lines.append(
                f"- {entry.reference.original_line} ({entry.document_id}): "
                f"{entry.result.error_message}"
            )
        lines.append("")

    return "\n".join(lines)


class ReportWriter:
    """Writes markdown reports into an output directory."""

    def __init__(
        self,
        output_dir: str = "informes",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.output_dir = output_dir
        self.clock = clock or datetime.now

    def write(self, entries: List[ReportEntry], reference_date: date) -> str:
        """Render and save the report, returning the file path."""
        generated_at = self.clock()
        os.makedirs(self.output_dir, exist_ok=True)

        file_name = f"informe_{generated_at.strftime('%Y%m%d_%H%M%S')}.md"
        path = os.path.join(self.output_dir, file_name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(render_report(entries, reference_date, generated_at))

        logger.info("Report written to %s", path)
        return path
