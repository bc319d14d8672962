from io import BytesIO
from typing import Dict, List, Optional, Sequence
from reportlab.lib.pagesizes import A4
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Table, TableStyle, Spacer
)
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors
from xml.sax.saxutils import escape


TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
])


def build_pdf(title: str, subtitle_lines: Sequence[str], sections: Sequence[Dict]) -> bytes:
    """Render a titled document of sections.

    Each section is ``{"title": str, "lines": [str], "table": [[header...], [row...]]}``,
    ``lines`` and ``table`` both optional.
    """
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(f"<b>{escape(title)}</b>", styles["Title"]))
    for line in subtitle_lines:
        story.append(Paragraph(escape(line), styles["Normal"]))
    story.append(Spacer(1, 16))

    for section in sections:
        story.append(Paragraph(escape(section["title"]), styles["Heading2"]))
        for line in section.get("lines", []):
            story.append(Paragraph(escape(str(line)), styles["Normal"]))

        table_rows: Optional[List[List]] = section.get("table")
        if table_rows and len(table_rows) > 1:
            table = Table([[str(c) for c in row] for row in table_rows])
            table.setStyle(TABLE_STYLE)
            story.append(table)
        elif table_rows:
            story.append(Paragraph("No data", styles["Italic"]))
        story.append(Spacer(1, 12))

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=40,
                            rightMargin=40, topMargin=40, bottomMargin=40)
    doc.build(story)
    return buffer.getvalue()
