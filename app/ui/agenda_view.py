"""Everything the agenda page shows, derived from an Agenda."""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from datetime import date as date_cls, datetime, time, timedelta
from typing import List, Optional, Sequence

from app.models.agenda import Agenda, AgendaItem

DEFAULT_SESSION_START = time(9, 0)
TIME_FORMAT = "%H:%M"
UNASSIGNED = "Unassigned"
NO_DATE_LABEL = "Upcoming Meeting"
NO_STAKEHOLDERS_MESSAGE = "No specific stakeholders identified."


@dataclass
class TimelineEntry:
    start_time: str
    topic: str
    description: str
    presenter: str
    duration_minutes: int
    is_last: bool = False

    @property
    def duration_label(self) -> str:
        return f"{self.duration_minutes} min"


@dataclass
class StakeholderEntry:
    name: str
    role: str

    @property
    def initial(self) -> str:
        return self.name[:1].upper() if self.name else "?"


@dataclass
class AgendaView:
    title: str
    date_label: str
    overview: str
    total_minutes: int
    timeline: List[TimelineEntry] = field(default_factory=list)
    stakeholders: List[StakeholderEntry] = field(default_factory=list)

    @property
    def total_label(self) -> str:
        return f"Total: {self.total_minutes} mins"

    @property
    def stakeholders_message(self) -> Optional[str]:
        return None if self.stakeholders else NO_STAKEHOLDERS_MESSAGE


def parse_session_start(value: str) -> time:
    return datetime.strptime(value.strip(), TIME_FORMAT).time()


def calculate_start_times(
    items: Sequence[AgendaItem],
    start: Optional[time] = None,
    day: Optional[date_cls] = None,
) -> List[str]:
    current = datetime.combine(day or date_cls.today(), start or DEFAULT_SESSION_START)
    times = []
    for item in items:
        times.append(current.strftime(TIME_FORMAT))
        current += timedelta(minutes=item.duration_minutes)
    return times


def total_duration(items: Sequence[AgendaItem]) -> int:
    return sum(item.duration_minutes for item in items)


def build_agenda_view(
    agenda: Agenda,
    start: Optional[time] = None,
    day: Optional[date_cls] = None,
) -> AgendaView:
    start_times = calculate_start_times(agenda.items, start=start, day=day)
    last = len(agenda.items) - 1
    timeline = [
        TimelineEntry(
            start_time=start_times[i],
            topic=item.topic,
            description=item.description,
            presenter=item.presenter.strip() or UNASSIGNED,
            duration_minutes=item.duration_minutes,
            is_last=i == last,
        )
        for i, item in enumerate(agenda.items)
    ]
    return AgendaView(
        title=agenda.title,
        date_label=agenda.date or NO_DATE_LABEL,
        overview=agenda.overview,
        total_minutes=total_duration(agenda.items),
        timeline=timeline,
        stakeholders=[StakeholderEntry(name=s.name, role=s.role) for s in agenda.stakeholders],
    )


# Model text goes into st.markdown(unsafe_allow_html=True), so every field is escaped.
def timeline_entry_html(entry: TimelineEntry) -> str:
    return (
        f"<div class='timeline-row'>"
        f"<div class='timeline-clock'>"
        f"<div class='timeline-time'>{entry.start_time}</div>"
        f"<div class='timeline-duration'>{entry.duration_label}</div>"
        f"</div>"
        f"<div class='timeline-card'><b>{escape(entry.topic)}</b><br/>{escape(entry.description)}"
        f"<div class='timeline-meta'>👤 {escape(entry.presenter)} &nbsp; ⏱ {entry.duration_minutes} minutes</div>"
        f"</div></div>"
    )


def stakeholder_html(person: StakeholderEntry) -> str:
    return (
        f"<span class='avatar'>{escape(person.initial)}</span><b>{escape(person.name)}</b><br/>"
        f"<span class='timeline-meta'>{escape(person.role)}</span>"
    )
