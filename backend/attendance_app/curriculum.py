"""
Curriculum lookup built from the school's subject-structure spreadsheet.

The spreadsheet has one row per (level, room, subject). Columns are found
by keyword rather than position, since the sheet is maintained by hand and
the headers drift between terms (Thai or English headers both work).
"""
import logging
import os
import threading

import pandas as pd
from flask import current_app

logger = logging.getLogger(__name__)

# Resolved in this order; a column claimed by one field is not offered to the next.
HEADER_KEYWORDS = (
    ("level", ("ระดับ", "ชั้น", "level", "grade")),
    ("room", ("ห้อง", "room", "section")),
    ("code", ("รหัส", "code")),
    ("name", ("ชื่อ", "รายวิชา", "name", "subject")),
    ("credits", ("หน่วยกิต", "credit")),
    ("hours", ("ชั่วโมง", "hour")),
)
REQUIRED_FIELDS = ("level", "room", "code", "name")


def find_columns(headers):
    """Map each field name to the first unclaimed header containing one of its keywords."""
    columns = {}
    claimed = set()
    for field, keywords in HEADER_KEYWORDS:
        columns[field] = None
        for header in headers:
            if header in claimed:
                continue
            lowered = str(header).lower()
            if any(keyword in lowered for keyword in keywords):
                columns[field] = header
                claimed.add(header)
                break
    return columns


def _clean(value):
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        pass
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _number(value):
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return 0
    number = float(number)
    return int(number) if number.is_integer() else number


def build_table(frame):
    """Turn a DataFrame into {level: {room: {code: entry}}}.

    Rows missing a level, room, code or name are skipped. A code repeated
    within one room replaces the earlier row.
    """
    table = {}
    if frame is None or frame.empty:
        logger.warning("Curriculum source has no rows")
        return table

    columns = find_columns(list(frame.columns))
    missing = [field for field in REQUIRED_FIELDS if columns[field] is None]
    if missing:
        logger.warning(
            "Curriculum headers do not match the expected keywords (missing %s); headers were %r",
            ", ".join(missing), list(frame.columns)
        )
        return table

    for _, row in frame.iterrows():
        level = _clean(row[columns["level"]])
        room = _clean(row[columns["room"]])
        code = _clean(row[columns["code"]])
        name = _clean(row[columns["name"]])
        if not level or not room or not code or not name:
            continue

        subjects = table.setdefault(level, {}).setdefault(room, {})
        if code in subjects:
            logger.warning("Duplicate subject code %s in %s room %s; keeping the later row", code, level, room)
        subjects[code] = {
            "code": code,
            "name": name,
            "credits": _number(row[columns["credits"]]) if columns["credits"] is not None else 0,
            "totalHours": _number(row[columns["hours"]]) if columns["hours"] is not None else 0,
        }

    for level, rooms in table.items():
        for room, subjects in rooms.items():
            logger.info("Loaded %d subjects for %s room %s", len(subjects), level, room)
    return table


def read_source(path, sheet_name=0):
    if path.lower().endswith(".csv"):
        return pd.read_csv(path, dtype=object)
    return pd.read_excel(path, sheet_name=sheet_name, dtype=object)


class CurriculumTable:
    """Read-only (level, room) -> subjects lookup.

    Loaded on first use and kept for the life of the process; ``reload()``
    rebuilds it from the source. A missing or unreadable source leaves the
    table empty so the rest of the service keeps working.
    """

    def __init__(self, source_path=None, sheet_name=0, app=None):
        self.source_path = source_path
        self.sheet_name = sheet_name
        self._table = {}
        self._loaded = False
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.source_path = app.config.get("CURRICULUM_XLSX_PATH", self.source_path)
        sheet = app.config.get("CURRICULUM_SHEET", self.sheet_name)
        self.sheet_name = int(sheet) if isinstance(sheet, str) and sheet.isdigit() else sheet
        app.extensions["curriculum"] = self

    @property
    def loaded(self):
        return self._loaded

    def _load(self):
        if not self.source_path or not os.path.exists(self.source_path):
            logger.warning("Curriculum source not found: %s", self.source_path)
            return {}
        logger.info("Loading subjects from %s", self.source_path)
        try:
            frame = read_source(self.source_path, self.sheet_name)
        except Exception:
            logger.exception("Could not read curriculum source %s", self.source_path)
            return {}
        return build_table(frame)

    def _ensure_loaded(self):
        if self._loaded:
            return
        with self._lock:
            if not self._loaded:
                self._table = self._load()
                self._loaded = True

    def reload(self):
        with self._lock:
            self._table = self._load()
            self._loaded = True
        return self.row_count()

    def row_count(self):
        self._ensure_loaded()
        return sum(len(subjects) for rooms in self._table.values() for subjects in rooms.values())

    def metadata_by_code(self, level, room):
        self._ensure_loaded()
        subjects = self._table.get(level, {}).get(room, {})
        return {code: dict(entry) for code, entry in subjects.items()}

    def subjects_for(self, level, room=None):
        """Subjects for one room, or for the whole level merged by code.

        An unknown room falls back to the merged level list.
        """
        self._ensure_loaded()
        rooms = self._table.get(level, {})
        if room and room in rooms:
            return [dict(entry) for entry in rooms[room].values()]

        merged = {}
        for subjects in rooms.values():
            for code, entry in subjects.items():
                merged[code] = entry
        return [dict(entry) for entry in merged.values()]


def get_curriculum():
    return current_app.extensions["curriculum"]
