from focusplay.domain.models import Meta, Session, Task
from focusplay.services.notes import render_notes


def test_session_derives_missing_minutes():
    s = Session.from_dict({"start": 0, "end": 45 * 60_000})
    assert s.minutes == 45


def test_task_from_camel_case_record():
    t = Task.from_dict(
        {
            "id": "k3j9x",
            "title": "Azure AZ-900",
            "status": "doing",
            "progress": 130,
            "createdAt": 1000,
            "tags": ["Azure"],
            "totalHours": "8",
            "hoursDone": 2.5,
            "sessions": [{"start": 0, "end": 60_000, "minutes": 1}],
            "isTiming": True,
            "timerStart": None,
        }
    )
    assert t.progress == 100
    assert t.total_hours == 8
    assert t.start_date == 1000
    assert len(t.sessions) == 1
    # no timerStart means not timing
    assert not t.is_timing


def test_task_dict_uses_camel_case():
    t = Task(id="a", title="a", total_hours=3, is_timing=True, timer_start=5)
    d = t.to_dict()
    assert d["totalHours"] == 3
    assert d["isTiming"] is True
    assert d["timerStart"] == 5
    assert Task.from_dict(d) == t


def test_meta_accepts_legacy_day_key():
    assert Meta.from_dict({"xp": 40, "streak": 2, "lastDoneDay": "Sun Oct 18 2026"}).last_done_day == "2026-10-18"
    assert Meta.from_dict({"lastDoneDay": ""}).last_done_day == ""


def test_render_notes_checklist():
    html = render_notes("Key points\n\n- [x] read chapter 1\n- [ ] do the quiz")
    assert "☑ read chapter 1" in html
    assert "☐ do the quiz" in html
    assert "<li>" in html
    assert render_notes("   ") == ""


def test_task_from_dict_wraps_single_tag():
    t = Task.from_dict({"id": "a", "tags": "Azure"})
    assert t.tags == ["Azure"]
    assert Task.from_dict({"id": "b", "tags": 7}).tags == []


def test_render_notes_escapes_raw_html():
    html = render_notes("<script>alert(1)</script> & **bold**")
    assert "<script>" not in html
    assert "&lt;script&gt;" in html or "&lt;script>" in html
    assert "<strong>bold</strong>" in html
