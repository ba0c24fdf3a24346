import io
from datetime import time
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.models.agenda import Agenda
from app.ui.agenda_view import build_agenda_view


def render_markdown(agenda: Agenda, start: Optional[time] = None) -> str:
    view = build_agenda_view(agenda, start=start)
    lines: List[str] = []
    lines.append(f"# {view.title}")
    lines.append("")
    lines.append(f"_{view.date_label}_")
    lines.append("")

    lines.append("## Overview")
    lines.append(view.overview or "_(Not available)_")
    lines.append("")

    lines.append(f"## Timeline ({view.total_label})")
    for i, entry in enumerate(view.timeline, start=1):
        lines.append(f"### {entry.start_time} · {i}. {entry.topic}")
        lines.append(f"_{entry.duration_label} · {entry.presenter}_")
        if entry.description:
            lines.append("")
            lines.append(entry.description)
        lines.append("")
    if not view.timeline:
        lines.append("No agenda items.")
        lines.append("")

    lines.append("## Stakeholders")
    if view.stakeholders:
        for person in view.stakeholders:
            lines.append(f"- **{person.name}** - {person.role}")
    else:
        lines.append(view.stakeholders_message)
    lines.append("")
    return "\n".join(lines)


def generate_pdf_agenda(agenda: Agenda, start: Optional[time] = None) -> bytes:
    """
    PDF structuré: en-tête, timeline, stakeholders.
    Built in memory, nothing is written to disk.
    """
    view = build_agenda_view(agenda, start=start)
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=view.title)
    styles = getSampleStyleSheet()
    elements = []

    body_style = styles["BodyText"]
    body_style.leading = 14

    elements.append(Paragraph(escape(view.date_label.upper()), styles["Normal"]))
    elements.append(Paragraph(escape(view.title), styles["Heading1"]))
    elements.append(Spacer(1, 6))
    elements.append(Paragraph(escape(view.overview) or "No overview available.", body_style))
    elements.append(Spacer(1, 12))

    elements.append(Paragraph(f"Timeline ({escape(view.total_label)})", styles["Heading2"]))
    if view.timeline:
        data = [["Start", "Topic", "Presenter", "Duration"]]
        for entry in view.timeline:
            topic = f"<b>{escape(entry.topic)}</b>"
            if entry.description:
                topic += f"<br/>{escape(entry.description)}"
            data.append([
                entry.start_time,
                Paragraph(topic, body_style),
                Paragraph(escape(entry.presenter), body_style),
                entry.duration_label,
            ])
        t = Table(data, hAlign="LEFT", colWidths=[50, 270, 110, 60])
        t.setStyle(TableStyle([
            ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
            ("BACKGROUND", (0,0), (-1,0), colors.lightgrey),
            ("VALIGN", (0,0), (-1,-1), "TOP"),
        ]))
        elements.append(t)
    else:
        elements.append(Paragraph("No agenda items.", body_style))
    elements.append(Spacer(1, 12))

    elements.append(Paragraph("Stakeholders", styles["Heading2"]))
    if view.stakeholders:
        for person in view.stakeholders:
            elements.append(
                Paragraph(f"<b>{escape(person.name)}</b> - {escape(person.role)}", body_style)
            )
    else:
        elements.append(Paragraph(view.stakeholders_message, body_style))

    doc.build(elements)
    return buffer.getvalue()
