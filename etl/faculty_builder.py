"""
faculty document builder
- Converts raw worksheet grids (row 0 = headers) into records
- Groups every worksheet by faculty_id
- Shapes one nested document per faculty found in Personal_Info:
    faculty_id / facultyID, personalInfo, about, biography, courses,
    research, publications, talks, students, news, gallery
- Pure in-memory: no I/O, a new structure per call
"""

import math
import re
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

FACULTY_KEY = "faculty_id"

# Header spellings seen across spreadsheet edits, probed in order.
LABEL_FIELDS: Dict[str, List[str]] = {
    "researchPositions": ["Position", "position", "field"],
    "interests": ["title", "Title", "Interest", "interest", "field"],
    "requirements": ["requirement", "Requirement", "field", "value"],
    "instructions": ["instruction", "Instruction", "field"],
}

# Funding_Info columns copied straight onto fundingInfo when filled in
FUNDING_DIRECT_COLUMNS = [
    "phd_application_link",
    "phd_email_template",
    "mtech_application_link",
    "mtech_email_template",
]

# plain decimal or exponent notation, as typed in a sheet cell
NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# output field -> (aliases, default); first non-empty alias wins
PUBLICATION_FIELDS = {
    "pdf_link": (["pdf_link", "pdfLink"], ""),
    "external_link": (["external_link", "externalLink"], ""),
}

CURRENT_STUDENT_FIELDS = {
    "degree_type": (["degree_type", "degreeType", "program"], "PhD"),
    "photo": (["photo", "Photo"], ""),
    "thesis_title": (["thesis_title", "thesisTitle", "topic"], ""),
    "start_date": (["start_date", "startDate"], ""),
    "end_date": (["end_date", "endDate"], ""),
}

GRADUATED_STUDENT_FIELDS = {
    "degree_type": (["degree_type", "degreeType", "program"], "PhD"),
    "photo": (["photo", "Photo"], ""),
    "thesis_title": (["thesis_title", "thesisTitle", "thesis"], ""),
    "start_date": (["start_date", "startDate"], ""),
    "end_date": (["end_date", "endDate", "year"], ""),
}

NEWS_FIELDS = {
    "title": (["title", "Title"], ""),
    "description": (["description", "Description", "content", "Content",
                     "news", "News", "text", "Text"], ""),
    "image": (["image", "Image", "photo", "Photo"], ""),
    "date": (["date", "Date", "published_date", "publishedDate",
              "published", "Published"], ""),
}

GALLERY_FIELDS = {
    "url": (["gallery_images", "gallery_image"], None),
    "alt": (["image_alternate_text", "alt_text"], ""),
    "caption": (["caption", "Caption"], ""),
    "caption_position": (["caption_position", "captionPosition"], "after"),
}

# ---------- Rows -> records ----------
def rows_to_records(rows: Sequence[Sequence[str]]) -> List[Dict[str, str]]:
    """
    Pair each data row with the header row.
    Short rows are padded with "", extra trailing cells are dropped.
    """
    if not rows:
        return []
    headers = list(rows[0])
    records = []
    for row in rows[1:]:
        rec = {}
        for i, header in enumerate(headers):
            rec[header] = row[i] if i < len(row) else ""
        records.append(rec)
    return records

# ---------- Field lookup ----------
def extract_label(record: Mapping[str, Any], candidates: Iterable[str]) -> Optional[str]:
    """Value of the first candidate present as a key, or None when none is."""
    for name in candidates:
        if name in record:
            return record[name]
    return None

def first_non_empty(record: Mapping[str, Any], aliases: Iterable[str], default: Any = "") -> Any:
    for name in aliases:
        value = record.get(name)
        if value:
            return value
    return default

def resolve_fields(record: Mapping[str, Any], fields: Mapping[str, tuple]) -> Dict[str, Any]:
    return {out: first_non_empty(record, aliases, default)
            for out, (aliases, default) in fields.items()}

def to_number(value: Any):
    """
    Parse a credits cell. Integral values come back as int, others as float.
    Blank or non-numeric cells give None so the output stays valid JSON.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not NUMBER_RE.fullmatch(text):
        return None
    num = float(text)
    if not math.isfinite(num):
        return None
    return int(num) if num.is_integer() else num

# ---------- Grouping ----------
def group_by_faculty(records: Iterable[Dict[str, Any]], key: str = FACULTY_KEY) -> Dict[str, List[Dict[str, Any]]]:
    grouped: Dict[str, List[Dict[str, Any]]] = OrderedDict()
    for rec in records:
        grouped.setdefault(rec.get(key), []).append(rec)
    return grouped

def unique_faculty_ids(records: Iterable[Dict[str, Any]], key: str = FACULTY_KEY) -> List[str]:
    """Distinct ids in first-seen order."""
    return list(group_by_faculty(records, key).keys())

# ---------- Section shaping ----------
def _with_fields(records: List[Dict[str, Any]], fields: Mapping[str, tuple]) -> List[Dict[str, Any]]:
    return [{**rec, **resolve_fields(rec, fields)} for rec in records]

def _labels(records: List[Dict[str, Any]], section: str) -> List[Optional[str]]:
    return [extract_label(rec, LABEL_FIELDS[section]) for rec in records]

def shape_courses(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [{**c, "credits": to_number(c.get("credits")), "status": c.get("status") or "current"}
            for c in records]

def shape_funding_info(records: List[Dict[str, Any]], requirements: List[Optional[str]]) -> Dict[str, Any]:
    """
    First Funding_Info row, plus every row's field/value pair and filled-in
    application link / email template columns. Later rows win on repeated keys.
    """
    funding: Dict[str, Any] = dict(records[0]) if records else {}
    for row in records:
        field, value = row.get("field"), row.get("value")
        if field and value:
            funding[field] = value
        for column in FUNDING_DIRECT_COLUMNS:
            if row.get(column):
                funding[column] = row[column]
    funding["requirements"] = requirements
    return funding

def shape_news(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    items = [resolve_fields(n, NEWS_FIELDS) for n in records]
    return [n for n in items if n["title"] or n["description"]]

def shape_gallery(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [resolve_fields(img, GALLERY_FIELDS) for img in records]

class FacultyTables:
    """Every worksheet normalized and grouped by faculty_id."""

    def __init__(self, raw_tables: Mapping[str, Sequence[Sequence[str]]]):
        self.records: Dict[str, List[Dict[str, str]]] = {
            name: rows_to_records(rows or []) for name, rows in raw_tables.items()
        }
        self._groups = {name: group_by_faculty(recs) for name, recs in self.records.items()}

    def faculty_ids(self) -> List[str]:
        return unique_faculty_ids(self.records.get("personalInfo", []))

    def rows(self, table: str, faculty_id: str) -> List[Dict[str, str]]:
        """Records of `table` for one id; missing tables behave as empty."""
        return list(self._groups.get(table, {}).get(faculty_id, []))

    def first(self, table: str, faculty_id: str) -> Dict[str, str]:
        matches = self.rows(table, faculty_id)
        return dict(matches[0]) if matches else {}

def build_faculty_document(tables: FacultyTables, faculty_id: str) -> Dict[str, Any]:
    def rows(table: str) -> List[Dict[str, str]]:
        return tables.rows(table, faculty_id)

    return {
        "faculty_id": faculty_id,
        "facultyID": faculty_id,
        "personalInfo": tables.first("personalInfo", faculty_id),
        "about": {
            **tables.first("about", faculty_id),
            "researchPositions": _labels(rows("researchPositions"), "researchPositions"),
            "links": rows("links"),
        },
        "biography": {
            "experience": rows("experience"),
            "education": rows("education"),
        },
        "courses": shape_courses(rows("courses")),
        "research": {
            "interests": _labels(rows("researchInterests"), "interests"),
            "fundingInfo": shape_funding_info(
                rows("fundingInfo"),
                _labels(rows("fundingRequirements"), "requirements"),
            ),
        },
        "publications": {
            "patents": _with_fields(rows("patents"), PUBLICATION_FIELDS),
            "journals": _with_fields(rows("journals"), PUBLICATION_FIELDS),
            "conferences": _with_fields(rows("conferences"), PUBLICATION_FIELDS),
            "bookChapters": _with_fields(rows("bookChapters"), PUBLICATION_FIELDS),
        },
        "talks": rows("talks"),
        "students": {
            "instructions": _labels(rows("studentInstructions"), "instructions"),
            "current": _with_fields(rows("currentStudents"), CURRENT_STUDENT_FIELDS),
            "graduated": _with_fields(rows("graduatedStudents"), GRADUATED_STUDENT_FIELDS),
        },
        "news": shape_news(rows("news")),
        "gallery": shape_gallery(rows("image")),
    }

def assemble_faculty_documents(raw_tables: Mapping[str, Sequence[Sequence[str]]]) -> List[Dict[str, Any]]:
    """
    Build one document per distinct faculty_id in personalInfo, in first-seen order.
    Rows of other tables whose id is not in personalInfo are ignored.
    """
    tables = FacultyTables(raw_tables)
    return [build_faculty_document(tables, fid) for fid in tables.faculty_ids()]
