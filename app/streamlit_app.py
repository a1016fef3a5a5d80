# streamlit run app/streamlit_app.py
import sys
import pandas as pd
import streamlit as st
from pathlib import Path

# Add parent directory to path so we can import the etl and config modules
SCRIPT_DIR = Path(__file__).parent.absolute()
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config import get_data_path
from etl.data_store import FacultyStore, StoreReadError

SECTIONS = ["Home", "Biography", "Courses", "Research", "Publications",
            "Invited Talks", "Students", "News", "Gallery"]

# columns that are bookkeeping, not content
HIDDEN_COLUMNS = ["faculty_id"]

store = FacultyStore(get_data_path())

# ---------- Data access ----------
@st.cache_data(show_spinner=False)
def load_faculty_cached(data_mtime: float):
    """Return all faculty documents; cache invalidates when the JSON file changes."""
    return store.load()

def _table(records) -> pd.DataFrame:
    df = pd.DataFrame(records or [])
    return df.drop(columns=[c for c in HIDDEN_COLUMNS if c in df.columns])

def _show_table(title: str, records):
    st.markdown(f"### {title}")
    if not records:
        st.caption("Nothing listed yet.")
        return
    st.dataframe(_table(records), width='stretch', hide_index=True)

def _show_list(title: str, items):
    st.markdown(f"### {title}")
    items = [i for i in items or [] if i]
    if not items:
        st.caption("Nothing listed yet.")
        return
    st.markdown("\n".join(f"- {i}" for i in items))

# ---------- Sections ----------
def render_home(doc):
    info = doc.get("personalInfo", {})
    about = doc.get("about", {})
    col1, col2 = st.columns([1, 2])
    with col1:
        photo = info.get("photo") or info.get("image")
        if photo:
            st.image(photo, width='stretch')
        for key in ("designation", "department", "email", "phone", "office"):
            if info.get(key):
                st.markdown(f"**{key.title()}:** {info[key]}")
    with col2:
        st.header(info.get("name") or doc.get("faculty_id"))
        for key, value in about.items():
            if key in ("faculty_id", "researchPositions", "links") or not value:
                continue
            st.write(value)
        _show_list("Open Research Positions", about.get("researchPositions"))
        links = about.get("links") or []
        if links:
            st.markdown("### Links")
            for link in links:
                label = link.get("name") or link.get("title") or link.get("url", "")
                st.markdown(f"- [{label}]({link.get('url', '')})")

def render_biography(doc):
    bio = doc.get("biography", {})
    _show_table("Experience", bio.get("experience"))
    _show_table("Education", bio.get("education"))

def render_courses(doc):
    courses = doc.get("courses") or []
    _show_table("Current Courses", [c for c in courses if c.get("status") != "past"])
    _show_table("Past Courses", [c for c in courses if c.get("status") == "past"])

def render_research(doc):
    research = doc.get("research", {})
    _show_list("Research Interests", research.get("interests"))
    funding = research.get("fundingInfo") or {}
    st.markdown("### Funding & Openings")
    shown = {k: v for k, v in funding.items() if k not in ("faculty_id", "field", "value", "requirements") and v}
    if shown:
        st.dataframe(pd.DataFrame([shown]), width='stretch', hide_index=True)
    _show_list("Requirements", funding.get("requirements"))

def render_publications(doc):
    pubs = doc.get("publications", {})
    _show_table("Journals", pubs.get("journals"))
    _show_table("Conferences", pubs.get("conferences"))
    _show_table("Book Chapters", pubs.get("bookChapters"))
    _show_table("Patents", pubs.get("patents"))

def render_talks(doc):
    talks = doc.get("talks") or []
    st.markdown("### Invited Talks & Presentations")
    if not talks:
        st.caption("Nothing listed yet.")
    for talk in talks:
        with st.expander(talk.get("title", "Untitled talk")):
            st.markdown(f"**{talk.get('event', '')}**")
            st.caption(f"{talk.get('location', '')} · {talk.get('date', '')}")

def render_students(doc):
    students = doc.get("students", {})
    _show_list("For Prospective Students", students.get("instructions"))
    _show_table("Current Students", students.get("current"))
    _show_table("Graduated Students", students.get("graduated"))

def render_news(doc):
    news = doc.get("news") or []
    st.markdown("### News")
    if not news:
        st.caption("Nothing listed yet.")
    for item in news:
        st.markdown(f"**{item.get('title', '')}**  \n{item.get('date', '')}")
        if item.get("image"):
            st.image(item["image"], width=320)
        st.write(item.get("description", ""))
        st.divider()

def render_gallery(doc):
    images = [img for img in doc.get("gallery") or [] if img.get("url")]
    st.markdown("### Gallery")
    if not images:
        st.caption("Nothing listed yet.")
        return
    cols = st.columns(3)
    for i, img in enumerate(images):
        with cols[i % 3]:
            if img.get("caption") and img.get("caption_position") == "before":
                st.caption(img["caption"])
            st.image(img["url"], width='stretch')
            if img.get("caption") and img.get("caption_position") != "before":
                st.caption(img["caption"])

RENDERERS = {
    "Home": render_home,
    "Biography": render_biography,
    "Courses": render_courses,
    "Research": render_research,
    "Publications": render_publications,
    "Invited Talks": render_talks,
    "Students": render_students,
    "News": render_news,
    "Gallery": render_gallery,
}

# ---------- UI ----------
st.set_page_config(page_title="Faculty Profile", layout="wide")

try:
    faculty = load_faculty_cached(store.mtime())
except StoreReadError as e:
    st.error(f"Error reading faculty data: {e}")
    st.stop()

with st.sidebar:
    if not store.exists():
        st.caption("No faculty data yet")
    else:
        st.caption(f"Faculty data: {len(faculty)} profiles")

    by_id = {FacultyStore.faculty_id_of(d): d for d in faculty}
    labels = {fid: (d.get("personalInfo") or {}).get("name") or fid for fid, d in by_id.items()}
    selected_id = None
    if by_id:
        selected_id = st.selectbox("Select Faculty", list(by_id.keys()), format_func=lambda fid: labels[fid])

    page = st.radio("Navigate", SECTIONS, index=0)

if selected_id is None:
    st.info("No faculty data found. Run `python etl/refresh_data.py` to pull it from Google Sheets.")
    st.stop()

RENDERERS[page](by_id[selected_id])
